import json
from pathlib import Path
from typing import Any, Dict, List


def load_json(path: Path) -> Any:
    """Read a JSON file. Raises ValueError on a missing, empty or unparsable file."""
    if not path.exists():
        raise ValueError(f"File not found: {path}")
    try:
        with path.open("r", encoding="utf-8") as f:
            content = f.read().strip()
    except OSError as e:
        raise ValueError(f"Cannot read {path}: {e}")
    if not content:
        raise ValueError(f"File is empty: {path}")
    try:
        return json.loads(content)
    except json.JSONDecodeError as e:
        raise ValueError(f"Invalid JSON in {path}: {e}")


def _unwrap(data: Any, key: str, path: Path) -> List[Any]:
    # Accept a bare list or an object wrapping the list under `key`
    if isinstance(data, dict):
        data = data.get(key)
    if not isinstance(data, list):
        raise ValueError(f"{path} must contain a list or an object with a '{key}' list")
    return data


def load_jobs(path: Path) -> List[Dict[str, Any]]:
    return _unwrap(load_json(path), "jobs", path)


def load_skills(path: Path) -> List[Any]:
    """Skills file: a list of labels, or an analysis result like {"skills": [...], "summary": "..."}."""
    return _unwrap(load_json(path), "skills", path)


def load_resources(path: Path) -> List[Dict[str, Any]]:
    return _unwrap(load_json(path), "resources", path)


def save_json(path: Path, data: Any) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    with path.open("w", encoding="utf-8") as f:
        json.dump(data, f, indent=2, ensure_ascii=False)
