from urllib.parse import urlparse


def normalize_text(s: str) -> str:
    return " ".join(s.strip().lower().split())


def skill_key(skill: str) -> str:
    # Comparison-only form; callers keep the original label for output.
    return skill.lower()


def normalize_title(title: str) -> str:
    return " ".join(title.split())


def normalize_company(company: str) -> str:
    return " ".join(company.split())


REMOTE_SYNS = {"remote", "remote - us", "remote - usa", "fully remote", "anywhere"}
HYBRID_SYNS = {"hybrid", "flexible", "part-remote"}
ONSITE_SYNS = {"onsite", "on-site", "on site"}


def normalize_location(location: str) -> str:
    """Collapse remote/hybrid/onsite synonyms; other locations keep their casing."""
    loc = normalize_text(location)
    if not loc or loc in REMOTE_SYNS:
        return "Remote"
    if loc in HYBRID_SYNS:
        return "Hybrid"
    if loc in ONSITE_SYNS:
        return "On-site"
    return " ".join(location.split())


def canonical_url(url: str) -> str:
    parsed = urlparse(url)
    path = parsed.path.rstrip("/")
    # Keep the query: job-board redirect links carry the posting id there
    base = f"{parsed.scheme}://{parsed.netloc}{path}" if parsed.scheme and parsed.netloc else path
    return f"{base}?{parsed.query}" if parsed.query else base
