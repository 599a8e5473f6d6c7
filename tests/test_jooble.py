"""
Tests for the Jooble client and record transform.
"""

import pytest
import requests
from skillmatch import jooble
from skillmatch.jooble import CATEGORY_KEYWORDS, fetch_category_jobs, fetch_jobs, transform_job
from skillmatch.ranker import rank_jobs
from skillmatch.retry import RetryError


class FakeResponse:
    def __init__(self, status_code=200, payload=None, text=""):
        self.status_code = status_code
        self._payload = payload
        self.text = text

    def json(self):
        if self._payload is None:
            raise requests.exceptions.JSONDecodeError("Expecting value", self.text, 0)
        return self._payload

    def raise_for_status(self):
        if self.status_code >= 400:
            raise requests.exceptions.HTTPError(f"{self.status_code} Error", response=self)


@pytest.fixture
def fake_post(monkeypatch):
    """Replace requests.post with a scripted sequence of responses or exceptions."""
    calls = []
    script = []

    def post(url, json=None, timeout=None):
        calls.append({"url": url, "json": json, "timeout": timeout})
        outcome = script.pop(0) if len(script) > 1 else script[0]
        if isinstance(outcome, Exception):
            raise outcome
        return outcome

    monkeypatch.setattr(jooble.requests, "post", post)
    return calls, script


class TestTransformJob:
    """Mapping Jooble results onto job records."""

    def test_full_record(self, jooble_payload):
        job = transform_job(jooble_payload["jobs"][0])
        assert job["id"] == "9132"
        assert job["title"] == "Machine Learning Engineer"
        assert job["company"] == "Neural Co"
        assert job["location"] == "Berlin"
        assert job["job_type"] == "Full-time"
        assert job["salary_info"] == "$150k"
        assert job["source"] == "examplejobs.com"
        assert job["source_url"] == "https://jooble.org/desc/9132?ckey=ml"
        assert job["is_external"] is True

    def test_snippet_html_stripped(self, jooble_payload):
        job = transform_job(jooble_payload["jobs"][0])
        assert job["description"] == "Build PyTorch models and deploy them on AWS with Docker."

    def test_skills_extracted_from_text(self, jooble_payload):
        job = transform_job(jooble_payload["jobs"][0])
        skills = job["required_skills"]
        assert {"Machine Learning", "PyTorch", "AWS", "Docker"} <= set(skills)
        assert skills.index("PyTorch") < skills.index("AWS")
        assert len(skills) <= 10

    def test_defaults(self, jooble_payload):
        job = transform_job(jooble_payload["jobs"][1])
        assert job["title"] == "Untitled Position"
        assert job["company"] == "boards.example"
        assert job["location"] == "Remote"
        assert job["job_type"] == "Full-time"
        assert job["salary_info"] is None
        assert len(job["id"]) == 36

    def test_company_fallback(self):
        job = transform_job({"title": "Dev"})
        assert job["company"] == "Company"
        assert job["source"] == "Jooble"
        assert job["source_url"] is None

    def test_transformed_jobs_rank(self, jooble_payload):
        jobs = [transform_job(j) for j in jooble_payload["jobs"]]
        ranked = rank_jobs(jobs, ["Docker", "AWS"])
        assert ranked[0].job["id"] == "9132"
        assert ranked[0].score > 0


class TestFetchJobs:
    """HTTP behaviour of the client."""

    def test_missing_api_key(self, monkeypatch):
        monkeypatch.delenv("JOOBLE_API_KEY", raising=False)
        with pytest.raises(ValueError, match="JOOBLE_API_KEY"):
            fetch_jobs("python")

    def test_success(self, fake_post, jooble_payload):
        calls, script = fake_post
        script.append(FakeResponse(200, jooble_payload))

        result = fetch_jobs("python", location="Berlin", page=2, api_key="k3y")

        assert calls[0]["url"] == "https://jooble.org/api/k3y"
        assert calls[0]["json"] == {"keywords": "python", "location": "Berlin", "page": 2}
        assert calls[0]["timeout"] == jooble.REQUEST_TIMEOUT
        assert result["total_count"] == 2
        assert [j["title"] for j in result["jobs"]] == ["Machine Learning Engineer", "Untitled Position"]

    def test_key_from_environment(self, fake_post, monkeypatch):
        calls, script = fake_post
        script.append(FakeResponse(200, {"totalCount": 0, "jobs": []}))
        monkeypatch.setenv("JOOBLE_API_KEY", "envkey")

        result = fetch_jobs()

        assert calls[0]["url"].endswith("/envkey")
        assert calls[0]["json"]["keywords"] == "machine learning"
        assert result == {"jobs": [], "total_count": 0}

    def test_client_error(self, fake_post):
        calls, script = fake_post
        script.append(FakeResponse(403, text="forbidden"))
        with pytest.raises(ValueError, match="403"):
            fetch_jobs("python", api_key="k")
        assert len(calls) == 1

    def test_retries_server_error(self, fake_post, no_sleep, jooble_payload):
        calls, script = fake_post
        script.extend([FakeResponse(503), FakeResponse(200, jooble_payload)])

        result = fetch_jobs("python", api_key="k")

        assert len(calls) == 2
        assert len(result["jobs"]) == 2

    def test_gives_up_after_timeouts(self, fake_post, no_sleep):
        calls, script = fake_post
        script.append(requests.exceptions.Timeout("read timed out"))

        with pytest.raises(RetryError):
            fetch_jobs("python", api_key="k")
        assert len(calls) == 4

    def test_unreadable_body(self, fake_post):
        _, script = fake_post
        script.append(FakeResponse(200, None, text="<html>maintenance</html>"))
        errors_before = jooble.logger.get_metrics()["errors_by_type"]

        with pytest.raises(ValueError, match="unreadable response"):
            fetch_jobs("python", api_key="k")

        errors = jooble.logger.get_metrics()["errors_by_type"]
        assert errors.get("InvalidJSON", 0) == errors_before.get("InvalidJSON", 0) + 1
        assert errors.get("RequestException", 0) == errors_before.get("RequestException", 0)

    def test_unexpected_payload(self, fake_post):
        _, script = fake_post
        script.append(FakeResponse(200, ["not", "a", "dict"]))
        with pytest.raises(ValueError, match="unexpected payload"):
            fetch_jobs("python", api_key="k")


class TestFetchCategoryJobs:

    def test_category_keywords(self, fake_post):
        calls, script = fake_post
        script.append(FakeResponse(200, {"totalCount": 0, "jobs": []}))

        fetch_category_jobs("devops", api_key="k")

        assert calls[0]["json"]["keywords"] == CATEGORY_KEYWORDS["devops"]

    def test_unknown_category(self):
        with pytest.raises(ValueError, match="Unknown job category"):
            fetch_category_jobs("astronaut", api_key="k")
