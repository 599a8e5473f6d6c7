"""
Pytest configuration and shared fixtures.
"""

import pytest
import json
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List


@dataclass
class PostedJob:
    """Minimal job entity owned by some other store."""
    title: str
    company: str = ""
    required_skills: List[str] = field(default_factory=list)


@pytest.fixture
def candidate_skills() -> List[str]:
    """Skills as returned by resume analysis."""
    return ["JavaScript", "React", "SQL", "Python", "Docker"]


@pytest.fixture
def sample_jobs() -> List[Dict[str, Any]]:
    """Internal job postings with caller-owned metadata."""
    return [
        {
            "id": "job-1",
            "title": "Frontend Engineer",
            "company": "Acme Corp",
            "location": "Remote",
            "required_skills": ["React", "TypeScript", "CSS"],
        },
        {
            "id": "job-2",
            "title": "Data Engineer",
            "company": "Beta Labs",
            "location": "New York, NY",
            "required_skills": ["Python", "SQL"],
        },
        {
            "id": "job-3",
            "title": "Platform Engineer",
            "company": "Gamma Inc",
            "location": "Austin, TX",
            "required_skills": ["Kubernetes", "Terraform", "Go"],
        },
        {
            "id": "job-4",
            "title": "Intern",
            "company": "Delta",
            "location": "Remote",
            "required_skills": [],
        },
    ]


@pytest.fixture
def posted_job_cls():
    return PostedJob


@pytest.fixture
def jooble_payload() -> Dict[str, Any]:
    """Sample Jooble search response."""
    return {
        "totalCount": 2,
        "jobs": [
            {
                "id": 9132,
                "title": "Machine Learning Engineer",
                "location": "Berlin",
                "snippet": "Build <b>PyTorch</b> models&nbsp;and deploy them on AWS with Docker.",
                "salary": "$150k",
                "source": "examplejobs.com",
                "type": "Full-time",
                "link": "https://jooble.org/desc/9132?ckey=ml",
                "company": "Neural Co",
                "updated": "2026-10-01T00:00:00.0000000",
            },
            {
                "title": "",
                "location": "",
                "snippet": "",
                "salary": "",
                "source": "boards.example",
                "type": "",
                "link": "https://jooble.org/desc/77",
                "company": "",
                "updated": "",
            },
        ],
    }


@pytest.fixture
def jobs_file(tmp_path, sample_jobs) -> Path:
    path = tmp_path / "jobs.json"
    path.write_text(json.dumps(sample_jobs))
    return path


@pytest.fixture
def skills_file(tmp_path, candidate_skills) -> Path:
    """Skills file in the shape of a resume analysis result."""
    path = tmp_path / "skills.json"
    path.write_text(json.dumps({"skills": candidate_skills, "summary": "Full-stack developer"}))
    return path


@pytest.fixture
def no_sleep(monkeypatch):
    """Make retry backoff instantaneous."""
    monkeypatch.setattr("time.sleep", lambda seconds: None)
