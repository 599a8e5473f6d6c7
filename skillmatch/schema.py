from collections.abc import Collection, Mapping
from typing import Any, Dict, List, Sequence
from urllib.parse import urlparse

SKILLS_FIELD = "required_skills"
OPTIONAL_STR_FIELDS = [
    "id",
    "title",
    "company",
    "location",
    "job_type",
    "description",
    "source",
    "source_url",
]


class InvalidArgument(ValueError):
    """Raised when a skill set or job record is malformed."""
    pass


def _is_non_empty_str(v: Any) -> bool:
    return isinstance(v, str) and v.strip() != ""


def _valid_url(v: str) -> bool:
    try:
        p = urlparse(v)
        return bool(p.scheme and p.netloc)
    except ValueError:
        return False


def skill_set_errors(skills: Any, label: str = "skills") -> List[str]:
    """
    Returns a list of validation error messages for a skill set.
    Empty list means valid.
    """
    if isinstance(skills, (str, bytes, Mapping)) or not isinstance(skills, Collection):
        return [f"{label} must be a collection of strings, got {type(skills).__name__}"]

    errors: List[str] = []
    for i, skill in enumerate(skills):
        if not isinstance(skill, str):
            errors.append(f"{label}[{i}] must be a string, got {type(skill).__name__}")
        elif not skill.strip():
            errors.append(f"{label}[{i}] must be a non-empty skill label")
    return errors


def validate_skill_set(skills: Any, label: str = "skills") -> None:
    """Raise InvalidArgument on the first malformed entry of a skill set."""
    errors = skill_set_errors(skills, label)
    if errors:
        raise InvalidArgument(errors[0])


def validate_job(data: Any) -> List[str]:
    """
    Returns a list of validation error messages for a job record.
    Empty list means valid. Only mapping-shaped records (parsed JSON) are
    checked field by field.
    """
    if not isinstance(data, Mapping):
        return [f"Job record must be a mapping, got {type(data).__name__}"]

    errors: List[str] = []

    if SKILLS_FIELD not in data:
        errors.append(f"Missing required field: {SKILLS_FIELD}")
    elif data[SKILLS_FIELD] is not None:
        errors.extend(skill_set_errors(data[SKILLS_FIELD], SKILLS_FIELD))

    # Optional strings: if present, must be strings
    for f in OPTIONAL_STR_FIELDS:
        if f in data and data[f] is not None and not isinstance(data[f], str):
            errors.append(f"Field '{f}' must be a string if provided")

    if _is_non_empty_str(data.get("source_url")):
        if not _valid_url(data["source_url"]):
            errors.append("Field 'source_url' must be a valid absolute URL (scheme + host)")

    return errors


def validate_jobs(jobs: Sequence[Dict[str, Any]]) -> Dict[int, List[str]]:
    """Validate a collection of job records, keyed by position. Only invalid records are reported."""
    report: Dict[int, List[str]] = {}
    for i, job in enumerate(jobs):
        errors = validate_job(job)
        if errors:
            report[i] = errors
    return report
