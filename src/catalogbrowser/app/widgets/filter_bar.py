"""Search field plus department and level selectors."""

from __future__ import annotations

from typing import Sequence

from textual.app import ComposeResult
from textual.containers import Horizontal
from textual.message import Message
from textual.widgets import Input, Select

from catalogbrowser.engine.filters import LEVEL_BUCKETS
from catalogbrowser.engine.models import ANY
from catalogbrowser.engine.session import (
    CriteriaEvent,
    DepartmentChanged,
    LevelChanged,
    SearchChanged,
)

ALL_DEPARTMENTS = ("All departments", ANY)
ALL_LEVELS = ("All levels", "")


def department_choices(departments: Sequence[str]) -> list[tuple[str, str]]:
    return [ALL_DEPARTMENTS, *((d, d) for d in departments)]


def level_choices() -> list[tuple[str, str]]:
    return [ALL_LEVELS, *((f"{b}-level", str(b)) for b in LEVEL_BUCKETS)]


class FilterBar(Horizontal):
    """Turns widget changes into criteria events for the session."""

    class CriteriaChanged(Message):
        """Fired whenever any of the three inputs changes."""
        def __init__(self, change: CriteriaEvent) -> None:
            super().__init__()
            self.change = change

    def __init__(self, **kwargs) -> None:
        super().__init__(id="filter-bar", **kwargs)

    def compose(self) -> ComposeResult:
        yield Input(placeholder="Search code, title or description...", id="search")
        yield Select(
            department_choices([]),
            allow_blank=False,
            value=ANY,
            id="department",
        )
        yield Select(level_choices(), allow_blank=False, value="", id="level")

    def set_departments(self, departments: Sequence[str]) -> None:
        self.query_one("#department", Select).set_options(department_choices(departments))

    def on_input_changed(self, event: Input.Changed) -> None:
        event.stop()
        self.post_message(self.CriteriaChanged(SearchChanged(event.value)))

    def on_select_changed(self, event: Select.Changed) -> None:
        event.stop()
        value = event.value if isinstance(event.value, str) else ""
        if event.select.id == "department":
            self.post_message(self.CriteriaChanged(DepartmentChanged(value)))
        elif event.select.id == "level":
            self.post_message(self.CriteriaChanged(LevelChanged(value)))
