"""Pure course-to-view-model mapping shared by every front end."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional, Sequence

from catalogbrowser.engine.models import Course

NO_RESULTS_TITLE = "No courses found"
NO_RESULTS_HINT = "Try adjusting your filters or search terms"
ERROR_TITLE = "Error loading courses"
ERROR_HINT = "Please restart the catalog browser or contact support"


@dataclass(frozen=True)
class Badge:
    kind: str  # "level", "term", "prereq"
    text: str


@dataclass(frozen=True)
class CourseCardView:
    code: str
    credits_label: str
    title: str
    department: str
    description: str
    badges: tuple[Badge, ...] = field(default_factory=tuple)


@dataclass(frozen=True)
class Placeholder:
    kind: str  # "no-results", "error"
    title: str
    hint: str


@dataclass(frozen=True)
class CourseListView:
    """Either a run of cards or a single placeholder, never both."""

    cards: tuple[CourseCardView, ...] = ()
    placeholder: Optional[Placeholder] = None

    @property
    def is_empty(self) -> bool:
        return not self.cards


def prerequisites_badge(course: Course) -> Badge:
    if course.prerequisites:
        return Badge("prereq", f"Prerequisites: {', '.join(course.prerequisites)}")
    return Badge("prereq", "No Prerequisites")


def course_card(course: Course) -> CourseCardView:
    badges = [Badge("level", f"Level {course.level}")]
    badges.extend(Badge("term", term) for term in course.terms)
    badges.append(prerequisites_badge(course))
    return CourseCardView(
        code=course.course_code,
        credits_label=f"{course.credits} Credits",
        title=course.title,
        department=course.department,
        description=course.description,
        badges=tuple(badges),
    )


def no_results_view() -> Placeholder:
    return Placeholder("no-results", NO_RESULTS_TITLE, NO_RESULTS_HINT)


def error_view() -> Placeholder:
    return Placeholder("error", ERROR_TITLE, ERROR_HINT)


def course_list_view(courses: Sequence[Course]) -> CourseListView:
    if not courses:
        return CourseListView(placeholder=no_results_view())
    return CourseListView(cards=tuple(course_card(c) for c in courses))


def count_label(count: int) -> str:
    noun = "course" if count == 1 else "courses"
    return f"{count} {noun}"
