"""Catalog screen: filter bar, result counter and course list."""

from __future__ import annotations

from typing import Optional, Sequence

from textual.app import ComposeResult
from textual.binding import Binding
from textual.containers import VerticalScroll
from textual.screen import Screen
from textual.widgets import Footer, Header, Input, Static

from catalogbrowser.app.widgets.course_card import CourseCard, PlaceholderPanel
from catalogbrowser.app.widgets.filter_bar import FilterBar
from catalogbrowser.engine.models import Course
from catalogbrowser.engine.session import CatalogSession
from catalogbrowser.engine.view import (
    CourseListView,
    count_label,
    course_list_view,
    error_view,
)


class CatalogScreen(Screen):
    """Main browsing screen. Acts as the session's view."""

    BINDINGS = [
        Binding("slash", "focus_search", "Search", show=True),
    ]

    def __init__(self, session: CatalogSession, source: str, **kwargs) -> None:
        super().__init__(**kwargs)
        self.session = session
        self.source = source
        self.list_view: Optional[CourseListView] = None
        self.count: Optional[int] = None

    def compose(self) -> ComposeResult:
        yield Header(show_clock=True)
        yield FilterBar()
        yield Static("Loading courses...", id="count")
        yield VerticalScroll(id="course-list")
        yield Footer()

    def on_mount(self) -> None:
        self.session.attach(self)
        self.run_worker(self.session.bootstrap(self.source), exclusive=True, name="bootstrap")

    def action_focus_search(self) -> None:
        self.query_one("#search", Input).focus()

    def on_filter_bar_criteria_changed(self, event: FilterBar.CriteriaChanged) -> None:
        try:
            self.session.handle_criteria_change(event.change)
        except ValueError as e:
            self.notify(str(e), title="Invalid filter", severity="error")

    # ── CatalogView ──

    def show_departments(self, departments: Sequence[str]) -> None:
        self.query_one(FilterBar).set_departments(departments)

    def show_courses(self, courses: Sequence[Course]) -> None:
        self.list_view = course_list_view(courses)
        container = self.query_one("#course-list", VerticalScroll)
        container.remove_children()
        if self.list_view.is_empty:
            container.mount(PlaceholderPanel(self.list_view.placeholder))
        else:
            container.mount_all(CourseCard(card) for card in self.list_view.cards)
        container.scroll_home(animate=False)

    def show_count(self, count: int) -> None:
        self.count = count
        self.query_one("#count", Static).update(f" {count_label(count)}")

    def show_error(self) -> None:
        self.list_view = CourseListView(placeholder=error_view())
        container = self.query_one("#course-list", VerticalScroll)
        container.remove_children()
        container.mount(PlaceholderPanel(self.list_view.placeholder))
        self.query_one("#count", Static).update("")
