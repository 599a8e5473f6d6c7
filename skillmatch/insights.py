"""Summaries over ranked jobs: score bands, skill gaps, and job search."""

from collections.abc import Mapping
from typing import Any, List, Optional, Sequence

from .normalize import skill_key
from .ranker import RankedJob, required_skills_of

STRONG_SCORE = 80
PARTIAL_SCORE = 50
STRONG_MATCH_THRESHOLD = 70
DEFAULT_GAP_LIMIT = 5
DEFAULT_RESOURCE_LIMIT = 6


def score_band(score: int) -> str:
    """Classify a compatibility score as strong, partial or weak."""
    if score >= STRONG_SCORE:
        return "strong"
    if score >= PARTIAL_SCORE:
        return "partial"
    return "weak"


def count_strong_matches(ranked: Sequence[RankedJob], threshold: int = STRONG_MATCH_THRESHOLD) -> int:
    return sum(1 for r in ranked if r.score >= threshold)


def best_match(ranked: Sequence[RankedJob]) -> Optional[RankedJob]:
    return ranked[0] if ranked else None


def learning_gaps(ranked: Sequence[RankedJob], limit: int = DEFAULT_GAP_LIMIT) -> List[str]:
    """
    Collect missing skills across ranked jobs, best match first.

    Duplicates are dropped by exact label; the first `limit` are returned.
    """
    gaps: List[str] = []
    seen = set()
    for r in ranked:
        for skill in r.missing:
            if skill not in seen:
                seen.add(skill)
                gaps.append(skill)
    return gaps[:limit]


def _field(record: Any, name: str, default: Any = "") -> Any:
    if isinstance(record, Mapping):
        return record.get(name, default)
    return getattr(record, name, default)


def filter_learning_resources(
    resources: Sequence[Any],
    gaps: Sequence[str],
    limit: int = DEFAULT_RESOURCE_LIMIT,
) -> List[Any]:
    """
    Keep resources whose skill_name mentions any of the gap skills.

    Resources may be mappings or objects. Input order is kept; no ranking.
    """
    gap_keys = [skill_key(g) for g in gaps]
    if not gap_keys:
        return []

    selected = []
    for resource in resources:
        name = skill_key(_field(resource, "skill_name") or "")
        if any(g in name for g in gap_keys):
            selected.append(resource)
            if len(selected) == limit:
                break
    return selected


def search_jobs(jobs: Sequence[Any], query: str) -> List[Any]:
    """Jobs whose title, company or any required skill contains the query (case-insensitive)."""
    q = skill_key(query or "")
    if not q:
        return list(jobs)

    results = []
    for job in jobs:
        record = job.job if isinstance(job, RankedJob) else job
        title = skill_key(_field(record, "title") or "")
        company = skill_key(_field(record, "company") or "")
        skills = required_skills_of(record)
        if q in title or q in company or any(q in skill_key(s) for s in skills):
            results.append(job)
    return results
