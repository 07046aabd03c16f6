"""Course filtering: search text, department and level bucket."""

from __future__ import annotations

from typing import Iterable, Optional, Sequence

from catalogbrowser.engine.models import Course, FilterCriteria

LEVEL_BUCKETS = (100, 200, 300, 400, 500, 600, 700)
BUCKET_WIDTH = 100


def matches_search(course: Course, term: str) -> bool:
    """Case-insensitive substring match on code, title or description."""
    if not term:
        return True
    term = term.lower()
    return (
        term in course.course_code.lower()
        or term in course.title.lower()
        or term in course.description.lower()
    )


def matches_department(course: Course, department: str) -> bool:
    return not department or course.department == department


def matches_level(course: Course, level_bucket: Optional[int]) -> bool:
    if level_bucket is None:
        return True
    return level_bucket <= course.level < level_bucket + BUCKET_WIDTH


def matches(course: Course, criteria: FilterCriteria) -> bool:
    return (
        matches_search(course, criteria.search_term)
        and matches_department(course, criteria.department)
        and matches_level(course, criteria.level_bucket)
    )


def filter_courses(catalog: Sequence[Course], criteria: FilterCriteria) -> tuple[Course, ...]:
    """Select the courses matching ``criteria``, keeping catalog order."""
    return tuple(c for c in catalog if matches(c, criteria))


def department_options(catalog: Iterable[Course]) -> list[str]:
    """Distinct departments, sorted ascending (case-sensitive)."""
    return sorted({c.department for c in catalog})
