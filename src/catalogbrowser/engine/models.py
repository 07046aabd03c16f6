"""Catalog data model."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional, Union

ANY = ""

_ANY_VALUES = ("", "any")


@dataclass(frozen=True)
class Course:
    course_code: str
    title: str
    department: str
    description: str
    level: int  # 100, 200, 300, ...
    credits: Union[int, float]
    terms: tuple[str, ...] = field(default_factory=tuple)
    prerequisites: tuple[str, ...] = field(default_factory=tuple)


@dataclass(frozen=True)
class FilterCriteria:
    """Current search text, department selection and level bucket.

    An empty search term, an empty department and a ``None`` level bucket
    each mean "any".
    """

    search_term: str = ""
    department: str = ANY
    level_bucket: Optional[int] = None

    @classmethod
    def from_inputs(
        cls,
        search: Optional[str] = "",
        department: Optional[str] = ANY,
        level: Union[str, int, None] = None,
    ) -> "FilterCriteria":
        """Build criteria from raw widget values.

        ``""``, ``None`` and ``"any"`` select everything for department and
        level. A level must be an integer, a whole-number float or a string
        that parses as an integer. Anything else raises ``ValueError``.
        """
        for name, value in (("search", search), ("department", department)):
            if value is not None and not isinstance(value, str):
                raise ValueError(f"{name} must be a string, not {type(value).__name__}")

        if department is None or department.lower() in _ANY_VALUES:
            department = ANY

        return cls(
            search_term=search or "",
            department=department,
            level_bucket=_level_bucket(level),
        )

    @property
    def is_unfiltered(self) -> bool:
        return not self.search_term and not self.department and self.level_bucket is None


def _level_bucket(level: Union[str, int, float, None]) -> Optional[int]:
    if level is None:
        return None
    if isinstance(level, str):
        if level.strip().lower() in _ANY_VALUES:
            return None
        return int(level)
    # bool is an int subclass
    if isinstance(level, bool) or not isinstance(level, (int, float)):
        raise ValueError(f"level must be a number, not {type(level).__name__}")
    if isinstance(level, float) and not level.is_integer():
        raise ValueError(f"level must be a whole number, not {level}")
    return int(level)
