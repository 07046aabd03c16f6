"""Course card and placeholder widgets."""

from __future__ import annotations

from textual.app import ComposeResult
from textual.containers import Horizontal, Vertical
from textual.widgets import Static

from catalogbrowser.engine.view import CourseCardView, Placeholder


class CourseCard(Vertical):
    """One course: header, title, department, description and badges."""

    def __init__(self, card: CourseCardView, **kwargs) -> None:
        super().__init__(classes="course-card", **kwargs)
        self.card = card
        self.border_title = card.code

    def compose(self) -> ComposeResult:
        with Horizontal(classes="course-header"):
            yield Static(self.card.code, classes="course-code", markup=False)
            yield Static(self.card.credits_label, classes="course-credits", markup=False)
        yield Static(self.card.title, classes="course-title", markup=False)
        yield Static(self.card.department, classes="course-department", markup=False)
        yield Static(self.card.description, classes="course-description", markup=False)
        with Horizontal(classes="course-footer"):
            for badge in self.card.badges:
                yield Static(badge.text, classes=f"badge badge-{badge.kind}", markup=False)


class PlaceholderPanel(Vertical):
    """Fixed message shown instead of cards (no results, load error)."""

    def __init__(self, placeholder: Placeholder, **kwargs) -> None:
        super().__init__(classes=f"placeholder placeholder-{placeholder.kind}", **kwargs)
        self.placeholder = placeholder

    def compose(self) -> ComposeResult:
        yield Static(f"[bold]{self.placeholder.title}[/]", classes="placeholder-title")
        yield Static(self.placeholder.hint, classes="placeholder-hint", markup=False)
