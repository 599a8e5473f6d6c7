"""
Job ranker - scores a collection of jobs against one candidate.

Every job is matched with match_skills and the results are ordered by
compatibility score, highest first. Jobs with equal scores keep their
input order. Input records are never modified.
"""

import dataclasses
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any, Collection, Dict, List, Optional, Protocol, Sequence, Tuple, Union, runtime_checkable

from .logger import get_logger
from .matcher import MatchResult, match_skills
from .schema import InvalidArgument, SKILLS_FIELD

logger = get_logger()


@runtime_checkable
class JobLike(Protocol):
    """Any job record that carries a list of required skills."""
    required_skills: Sequence[str]


JobRecord = Union[JobLike, Mapping[str, Any]]


@dataclass(frozen=True)
class RankedJob:
    """A job record paired with its match against the candidate."""
    job: JobRecord
    score: int = 0
    matched: Tuple[str, ...] = ()
    missing: Tuple[str, ...] = ()

    @classmethod
    def from_match(cls, job: JobRecord, result: MatchResult) -> "RankedJob":
        return cls(job=job, score=result.score, matched=result.matched, missing=result.missing)

    @property
    def match(self) -> MatchResult:
        return MatchResult(score=self.score, matched=self.matched, missing=self.missing)

    def to_dict(self) -> Dict[str, Any]:
        """Job fields plus compatibility_score, matched_skills and missing_skills."""
        return {
            **_job_fields(self.job),
            "compatibility_score": self.score,
            "matched_skills": list(self.matched),
            "missing_skills": list(self.missing),
        }


def _job_fields(job: Any) -> Dict[str, Any]:
    if isinstance(job, Mapping):
        return dict(job)
    if hasattr(job, "to_dict"):
        return dict(job.to_dict())
    if dataclasses.is_dataclass(job):
        return dataclasses.asdict(job)
    return dict(vars(job))


def required_skills_of(job: JobRecord) -> Sequence[str]:
    """
    Read the required skills of a job record.

    Mappings are read by key, other objects by attribute. A present but
    null field counts as no requirements.

    Raises:
        InvalidArgument: If the record has no required skills field
    """
    if isinstance(job, Mapping):
        if SKILLS_FIELD not in job:
            raise InvalidArgument(f"Job record is missing '{SKILLS_FIELD}'")
        skills = job[SKILLS_FIELD]
    elif hasattr(job, SKILLS_FIELD):
        skills = getattr(job, SKILLS_FIELD)
    else:
        raise InvalidArgument(f"{type(job).__name__} has no '{SKILLS_FIELD}' attribute")
    return [] if skills is None else skills


def rank_jobs(jobs: Sequence[JobRecord], candidate_skills: Collection[str]) -> List[RankedJob]:
    """
    Rank jobs by compatibility with the candidate's skills.

    Args:
        jobs: Job records (mappings or objects with required_skills)
        candidate_skills: Skills extracted from the candidate's resume

    Returns:
        New list of RankedJob, highest score first; ties keep input order

    Raises:
        InvalidArgument: If a job or the candidate skill set is malformed
    """
    ranked = []
    for i, job in enumerate(jobs):
        try:
            result = match_skills(candidate_skills, required_skills_of(job))
        except InvalidArgument as e:
            raise InvalidArgument(f"jobs[{i}]: {e}") from e
        ranked.append(RankedJob.from_match(job, result))

    # sorted() is stable, equal scores stay in input order
    ranked = sorted(ranked, key=lambda r: r.score, reverse=True)

    top: Optional[RankedJob] = ranked[0] if ranked else None
    logger.debug(
        "Ranked jobs",
        jobs=len(ranked),
        top_score=top.score if top else None,
    )
    return ranked


def enrich_jobs(jobs: Sequence[JobRecord], candidate_skills: Collection[str]) -> List[Dict[str, Any]]:
    """Rank jobs and flatten each into a dict of job fields plus match fields."""
    return [r.to_dict() for r in rank_jobs(jobs, candidate_skills)]
