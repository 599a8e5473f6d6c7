"""
skillmatch - resume-to-job skill matching.

Scores how well a candidate's skills cover a job's required skills and
ranks job collections by that score.
"""

from .matcher import MatchResult, match_skills, skills_match
from .ranker import JobLike, JobRecord, RankedJob, enrich_jobs, rank_jobs
from .schema import InvalidArgument

__version__ = "0.1.0"

__all__ = [
    "InvalidArgument",
    "JobLike",
    "JobRecord",
    "MatchResult",
    "RankedJob",
    "enrich_jobs",
    "match_skills",
    "rank_jobs",
    "skills_match",
]
