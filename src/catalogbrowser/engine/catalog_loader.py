"""Catalog document loading."""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Optional, Union

import requests

from catalogbrowser.engine.models import Course

log = logging.getLogger(__name__)

_REQUIRED_KEYS = ("courseCode", "title", "department", "description", "level", "credits")
_LIST_KEYS = ("terms", "prerequisites")


class LoadError(Exception):
    """The catalog source could not be retrieved or parsed."""

    def __init__(self, source: str, reason: str):
        super().__init__(f"Failed to load courses from {source}: {reason}")
        self.source = source
        self.reason = reason


def _is_url(source: str) -> bool:
    return source.startswith(("http://", "https://"))


def _fetch(source: str, timeout: Optional[float]) -> Any:
    """Fetch and decode the JSON document behind ``source``."""
    if _is_url(source):
        try:
            resp = requests.get(source, timeout=timeout)
            resp.raise_for_status()
            return resp.json()
        except requests.exceptions.RequestException as e:
            raise LoadError(source, str(e)) from e
        except ValueError as e:
            raise LoadError(source, f"invalid JSON: {e}") from e

    try:
        text = Path(source).read_text(encoding="utf-8")
    except UnicodeDecodeError as e:
        raise LoadError(source, f"not UTF-8 text: {e.reason} at byte {e.start}") from e
    except OSError as e:
        raise LoadError(source, str(e)) from e
    try:
        return json.loads(text)
    except json.JSONDecodeError as e:
        raise LoadError(source, f"invalid JSON: {e}") from e


def _parse_course(raw: dict) -> Course:
    # Scalar field types are taken as found
    return Course(
        course_code=raw["courseCode"],
        title=raw["title"],
        department=raw["department"],
        description=raw["description"],
        level=raw["level"],
        credits=raw["credits"],
        terms=tuple(raw.get("terms") or ()),
        prerequisites=tuple(raw.get("prerequisites") or ()),
    )


def parse_catalog(document: Any, source: str = "<document>") -> tuple[Course, ...]:
    """Turn a decoded ``{"courses": [...]}`` document into course records."""
    if not isinstance(document, dict) or not isinstance(document.get("courses"), list):
        raise LoadError(source, "expected an object with a 'courses' list")

    courses = []
    for i, raw in enumerate(document["courses"]):
        if not isinstance(raw, dict):
            raise LoadError(source, f"course #{i} is not an object")
        missing = [k for k in _REQUIRED_KEYS if k not in raw]
        if missing:
            raise LoadError(source, f"course #{i} is missing {', '.join(missing)}")
        for key in _LIST_KEYS:
            if raw.get(key) is not None and not isinstance(raw[key], list):
                raise LoadError(
                    source, f"course #{i} has {key} of type {type(raw[key]).__name__}, expected a list"
                )
        courses.append(_parse_course(raw))
    return tuple(courses)


def load_catalog(source: Union[str, Path], timeout: Optional[float] = None) -> tuple[Course, ...]:
    """Load the catalog from a file path or an http(s) URL.

    No retry is attempted. ``timeout`` only applies to URLs; ``None`` waits
    indefinitely.
    """
    source = str(source)
    try:
        courses = parse_catalog(_fetch(source, timeout), source)
    except LoadError as e:
        log.warning("%s", e)
        raise
    log.info("Loaded %d courses from %s", len(courses), source)
    return courses
