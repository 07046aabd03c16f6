"""Catalog session: load once, then filter and redraw on every input change."""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass, replace
from enum import Enum
from typing import Callable, Optional, Protocol, Sequence, Union

from catalogbrowser.engine.catalog_loader import LoadError, load_catalog
from catalogbrowser.engine.filters import department_options, filter_courses
from catalogbrowser.engine.models import ANY, Course, FilterCriteria

log = logging.getLogger(__name__)


class Phase(str, Enum):
    UNINITIALIZED = "uninitialized"
    LOADING = "loading"
    READY = "ready"
    FAILED = "failed"  # terminal for the session


class CatalogView(Protocol):
    """Output side of the browser. Every call replaces what was shown before."""

    def show_departments(self, departments: Sequence[str]) -> None: ...

    def show_courses(self, courses: Sequence[Course]) -> None: ...

    def show_count(self, count: int) -> None: ...

    def show_error(self) -> None: ...


@dataclass(frozen=True)
class SearchChanged:
    value: str


@dataclass(frozen=True)
class DepartmentChanged:
    value: str


@dataclass(frozen=True)
class LevelChanged:
    value: Union[str, int, None]


CriteriaEvent = Union[SearchChanged, DepartmentChanged, LevelChanged]


@dataclass
class InputValues:
    """Raw values of the three input controls, as last reported."""
    search: str = ""
    department: str = ANY
    level: Union[str, int, None] = None

    def to_criteria(self) -> FilterCriteria:
        return FilterCriteria.from_inputs(self.search, self.department, self.level)


Loader = Callable[[str], Sequence[Course]]


class CatalogSession:
    """Owns the loaded catalog and drives the filter/render cycle."""

    def __init__(
        self,
        view: Optional[CatalogView] = None,
        loader: Optional[Loader] = None,
    ):
        self.view = view
        self._loader = loader or load_catalog
        self.phase = Phase.UNINITIALIZED
        self.catalog: tuple[Course, ...] = ()
        self.departments: list[str] = []
        self.inputs = InputValues()
        self.criteria = FilterCriteria()
        self.filtered: tuple[Course, ...] = ()
        self.error: Optional[LoadError] = None

    def attach(self, view: CatalogView) -> None:
        self.view = view

    @property
    def is_ready(self) -> bool:
        return self.phase == Phase.READY

    async def bootstrap(self, source: str) -> Phase:
        """Load the catalog, populate departments and show everything.

        A load failure shows the error state and nothing else.
        """
        if self.phase != Phase.UNINITIALIZED:
            raise RuntimeError(f"Session already bootstrapped ({self.phase.value})")
        if self.view is None:
            raise RuntimeError("No view attached")

        self.phase = Phase.LOADING
        try:
            courses = await asyncio.to_thread(self._loader, source)
        except LoadError as e:
            self.error = e
            self.phase = Phase.FAILED
            self.view.show_error()
            return self.phase

        self.catalog = tuple(courses)
        self.filtered = self.catalog
        self.departments = department_options(self.catalog)
        self.view.show_departments(self.departments)
        self.phase = Phase.READY
        self.view.show_courses(self.catalog)
        self.view.show_count(len(self.catalog))
        return self.phase

    def handle_criteria_change(self, event: CriteriaEvent) -> tuple[Course, ...]:
        """Fold one input change into the current values and redraw.

        Ignored unless the session is ready.
        """
        if not self.is_ready:
            log.debug("Ignoring %r while %s", event, self.phase.value)
            return ()

        if isinstance(event, SearchChanged):
            inputs = replace(self.inputs, search=event.value)
        elif isinstance(event, DepartmentChanged):
            inputs = replace(self.inputs, department=event.value)
        elif isinstance(event, LevelChanged):
            inputs = replace(self.inputs, level=event.value)
        else:
            raise TypeError(f"Unknown criteria event: {event!r}")

        # Validate before committing so a bad value leaves the session untouched
        criteria = inputs.to_criteria()
        self.inputs = inputs
        return self.apply(criteria)

    def apply(self, criteria: FilterCriteria) -> tuple[Course, ...]:
        """Recompute the filtered view from the full catalog and redraw."""
        if not self.is_ready:
            return ()
        self.criteria = criteria
        self.filtered = filter_courses(self.catalog, criteria)
        if criteria.is_unfiltered:
            log.debug("No filters -> all %d courses", len(self.catalog))
        else:
            log.debug("%r -> %d/%d courses", criteria, len(self.filtered), len(self.catalog))
        self.view.show_courses(self.filtered)
        self.view.show_count(len(self.filtered))
        return self.filtered
