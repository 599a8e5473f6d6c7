"""
Skill matcher - compares a candidate's skills with a job's required skills.

Produces a compatibility score (0-100) and partitions the required skills
into matched and missing lists. Matching is lexical: two labels are
equivalent when one contains the other after lower-casing.

Invariants:
- len(matched) + len(missing) == len(required_skills)
- matched and missing keep the original strings and order of required_skills
- a job with no required skills scores 0
"""

from dataclasses import dataclass
from decimal import Decimal, ROUND_HALF_UP
from typing import Callable, Collection, Sequence, Tuple

from .normalize import skill_key
from .schema import validate_skill_set


@dataclass(frozen=True)
class MatchResult:
    """Outcome of comparing one candidate skill set with one job."""
    score: int = 0
    matched: Tuple[str, ...] = ()
    missing: Tuple[str, ...] = ()

    def to_dict(self) -> dict:
        return {
            "score": self.score,
            "matched": list(self.matched),
            "missing": list(self.missing),
        }


def skills_match(candidate: str, required: str) -> bool:
    """Return True if a candidate skill satisfies a required skill.

    Both labels must already be normalized with skill_key. Containment is
    checked in both directions, so "react.js" satisfies "react" and
    "java" satisfies "javascript".
    """
    return required in candidate or candidate in required


def compatibility_score(matched_count: int, required_count: int) -> int:
    """Percentage of required skills matched, rounded half up."""
    if required_count <= 0:
        return 0
    ratio = Decimal(100 * matched_count) / Decimal(required_count)
    return int(ratio.quantize(Decimal("1"), rounding=ROUND_HALF_UP))


def match_skills(
    candidate_skills: Collection[str],
    required_skills: Sequence[str],
    predicate: Callable[[str, str], bool] = skills_match,
) -> MatchResult:
    """
    Compare a candidate skill set against a job's required skills.

    Args:
        candidate_skills: Skills extracted from the candidate's resume
        required_skills: Skills the job asks for, in display order
        predicate: Equivalence test on normalized labels (default: substring)

    Returns:
        MatchResult with score, matched and missing skills

    Raises:
        InvalidArgument: If either set is not a sequence of non-empty strings
    """
    validate_skill_set(candidate_skills, "candidate_skills")
    validate_skill_set(required_skills, "required_skills")

    if not candidate_skills or not required_skills:
        return MatchResult(score=0, matched=(), missing=tuple(required_skills))

    candidate_keys = [skill_key(s) for s in candidate_skills]

    matched = []
    missing = []
    for skill in required_skills:
        key = skill_key(skill)
        if any(predicate(c, key) for c in candidate_keys):
            matched.append(skill)
        else:
            missing.append(skill)

    return MatchResult(
        score=compatibility_score(len(matched), len(required_skills)),
        matched=tuple(matched),
        missing=tuple(missing),
    )
