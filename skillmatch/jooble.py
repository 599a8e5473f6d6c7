"""Jooble job-search client.

Fetches postings from the Jooble REST API and turns them into job records
that carry a required_skills field, ready for rank_jobs.
"""

import uuid
from typing import Any, Dict, Optional

import requests
from bs4 import BeautifulSoup

from .env import jooble_api_key
from .logger import get_logger
from .normalize import canonical_url, normalize_company, normalize_location, normalize_title
from .retry import RetryError, TransientHTTPError, exponential_backoff, raise_for_retryable_status
from .skills import extract_skills

logger = get_logger()

JOOBLE_ENDPOINT = "https://jooble.org/api/{api_key}"
REQUEST_TIMEOUT = 20
DEFAULT_KEYWORDS = "machine learning"

CATEGORY_KEYWORDS = {
    "machine-learning": "machine learning AI deep learning",
    "full-stack": "full stack developer fullstack",
    "frontend": "frontend react vue angular",
    "backend": "backend nodejs python java",
    "data-science": "data scientist analytics",
    "devops": "devops cloud engineer SRE",
}


@exponential_backoff(
    max_retries=3,
    base_delay=1.0,
    exceptions=(requests.exceptions.Timeout, requests.exceptions.ConnectionError, TransientHTTPError),
    on_retry=lambda attempt, e, delay: logger.warning(
        "Jooble request failed, retrying", attempt=attempt, error=str(e), delay=delay
    ),
)
def _post_with_retry(url: str, payload: Dict[str, Any]):
    resp = requests.post(url, json=payload, timeout=REQUEST_TIMEOUT)
    raise_for_retryable_status(resp)
    return resp


def _strip_html(snippet: str) -> str:
    # Jooble highlights search terms with <b> tags and uses &nbsp; entities
    if not snippet:
        return ""
    text = BeautifulSoup(snippet, "html.parser").get_text(" ")
    return " ".join(text.split())


def transform_job(raw: Dict[str, Any]) -> Dict[str, Any]:
    """Map one Jooble result onto a job record with extracted required skills."""
    title = normalize_title(raw.get("title") or "") or "Untitled Position"
    description = _strip_html(raw.get("snippet") or "")
    company = raw.get("company") or raw.get("source") or "Company"
    link = raw.get("link") or ""
    raw_id = raw.get("id")

    return {
        "id": str(raw_id) if raw_id not in (None, "") else str(uuid.uuid4()),
        "title": title,
        "company": normalize_company(company),
        "location": normalize_location(raw.get("location") or ""),
        "job_type": raw.get("type") or "Full-time",
        "description": description,
        "salary_info": raw.get("salary") or None,
        "source_url": canonical_url(link) if link else None,
        "source": raw.get("source") or "Jooble",
        "updated_at": raw.get("updated"),
        "is_external": True,
        "required_skills": extract_skills(f"{description} {title}"),
    }


def fetch_jobs(
    keywords: str = DEFAULT_KEYWORDS,
    location: str = "",
    page: int = 1,
    api_key: Optional[str] = None,
) -> Dict[str, Any]:
    """
    Search Jooble and return transformed job records.

    Args:
        keywords: Search keywords
        location: Optional location filter
        page: Result page (1-based)
        api_key: Jooble API key (or read from JOOBLE_API_KEY env var)

    Returns:
        {"jobs": [job records], "total_count": int}

    Raises:
        ValueError: On missing key, HTTP errors, or a malformed response
        RetryError: When transient failures persist after all retries
    """
    key = api_key or jooble_api_key()
    if not key:
        raise ValueError("Missing JOOBLE_API_KEY. Set env var or pass api_key.")

    url = JOOBLE_ENDPOINT.format(api_key=key)
    payload = {"keywords": keywords, "location": location, "page": page}

    logger.info("Fetching Jooble jobs", keywords=keywords, location=location or "any", page=page)
    logger.record_fetch_attempt()
    logger.record_api_call()
    try:
        resp = _post_with_retry(url, payload)
        resp.raise_for_status()
        data = resp.json()
    except RetryError:
        logger.record_fetch_failure("RetryExhausted")
        logger.error("Jooble request kept failing", keywords=keywords)
        raise
    except requests.exceptions.JSONDecodeError as e:
        # Subclass of RequestException, must be caught first
        logger.record_fetch_failure("InvalidJSON")
        logger.error("Jooble returned non-JSON body", error=str(e))
        raise ValueError(f"Jooble returned an unreadable response: {e}")
    except requests.exceptions.HTTPError as e:
        status = e.response.status_code if e.response is not None else "HTTPError"
        logger.record_fetch_failure(f"HTTPError_{status}")
        logger.error("Jooble request failed", status=status)
        raise ValueError(f"Jooble API error ({status})")
    except requests.exceptions.RequestException as e:
        logger.record_fetch_failure("RequestException")
        logger.error("Jooble request error", error=str(e))
        raise ValueError(f"Jooble request error: {e}")

    if not isinstance(data, dict):
        logger.record_fetch_failure("InvalidPayload")
        raise ValueError("Jooble returned an unexpected payload")

    jobs = [transform_job(j) for j in data.get("jobs") or [] if isinstance(j, dict)]
    logger.record_fetch_success()
    logger.info("Fetched Jooble jobs", count=len(jobs), total=data.get("totalCount", 0))
    return {"jobs": jobs, "total_count": int(data.get("totalCount") or 0)}


def fetch_category_jobs(
    category: str,
    location: str = "",
    page: int = 1,
    api_key: Optional[str] = None,
) -> Dict[str, Any]:
    """Search Jooble with the keywords mapped to a job category."""
    if category not in CATEGORY_KEYWORDS:
        known = ", ".join(sorted(CATEGORY_KEYWORDS))
        raise ValueError(f"Unknown job category '{category}'. Use one of: {known}")
    return fetch_jobs(CATEGORY_KEYWORDS[category], location=location, page=page, api_key=api_key)
