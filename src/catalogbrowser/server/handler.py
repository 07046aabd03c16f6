"""Server handler: dispatches bridge requests to a catalog session."""

from __future__ import annotations

import functools
import logging
from typing import Callable, Optional, Sequence

from catalogbrowser.config.settings import Settings
from catalogbrowser.engine.catalog_loader import load_catalog
from catalogbrowser.engine.models import Course
from catalogbrowser.engine.session import (
    CatalogSession,
    DepartmentChanged,
    LevelChanged,
    SearchChanged,
)
from catalogbrowser.engine.view import (
    CourseCardView,
    Placeholder,
    count_label,
    course_list_view,
    error_view,
)

from .protocol import Notification, NotificationMethod

log = logging.getLogger(__name__)


def _card_to_dict(card: CourseCardView) -> dict:
    return {
        "code": card.code,
        "creditsLabel": card.credits_label,
        "title": card.title,
        "department": card.department,
        "description": card.description,
        "badges": [{"kind": b.kind, "text": b.text} for b in card.badges],
    }


def _placeholder_to_dict(placeholder: Placeholder) -> dict:
    return {
        "kind": placeholder.kind,
        "title": placeholder.title,
        "hint": placeholder.hint,
    }


class ServerHandler:
    """Routes requests to the session and relays its view as notifications."""

    def __init__(
        self,
        settings: Optional[Settings] = None,
        write_notification: Optional[Callable[[Notification], None]] = None,
    ):
        self.settings = settings or Settings.load()
        self._write_notification = write_notification or (lambda n: None)
        self.session = CatalogSession(
            view=self,
            loader=functools.partial(load_catalog, timeout=self.settings.fetch_timeout),
        )

    async def dispatch(self, msg: dict) -> dict:
        """Route a request message to the appropriate handler method."""
        method = msg.get("method", "")
        params = msg.get("params") or {}

        handler_map = {
            "bootstrap": self._bootstrap,
            "searchChanged": self._search_changed,
            "departmentChanged": self._department_changed,
            "levelChanged": self._level_changed,
            "getState": self._get_state,
        }

        handler = handler_map.get(method)
        if handler is None:
            raise ValueError(f"Unknown method: {method}")

        return await handler(params)

    # ── CatalogView ──

    def _notify(self, method: NotificationMethod, params: dict) -> None:
        self._write_notification(Notification(method, params))

    def show_departments(self, departments: Sequence[str]) -> None:
        self._notify(NotificationMethod.DEPARTMENTS, {"departments": list(departments)})

    def show_courses(self, courses: Sequence[Course]) -> None:
        view = course_list_view(courses)
        self._notify(NotificationMethod.COURSES, {
            "cards": [_card_to_dict(c) for c in view.cards],
            "placeholder": _placeholder_to_dict(view.placeholder) if view.placeholder else None,
        })

    def show_count(self, count: int) -> None:
        self._notify(NotificationMethod.COUNT, {"count": count, "label": count_label(count)})

    def show_error(self) -> None:
        self._notify(NotificationMethod.ERROR, _placeholder_to_dict(error_view()))

    # ── Methods ──

    def _state(self) -> dict:
        s = self.session
        return {
            "phase": s.phase.value,
            "count": len(s.filtered),
            "total": len(s.catalog),
            "criteria": {
                "searchTerm": s.criteria.search_term,
                "department": s.criteria.department,
                "levelBucket": s.criteria.level_bucket,
            },
        }

    async def _bootstrap(self, params: dict) -> dict:
        source = params.get("source") or self.settings.data_source
        await self.session.bootstrap(source)
        result = self._state()
        if self.session.error is not None:
            result["error"] = str(self.session.error)
        return result

    async def _search_changed(self, params: dict) -> dict:
        self.session.handle_criteria_change(SearchChanged(params.get("value")))
        return self._state()

    async def _department_changed(self, params: dict) -> dict:
        self.session.handle_criteria_change(DepartmentChanged(params.get("value")))
        return self._state()

    async def _level_changed(self, params: dict) -> dict:
        self.session.handle_criteria_change(LevelChanged(params.get("value")))
        return self._state()

    async def _get_state(self, params: dict) -> dict:
        result = self._state()
        result["departments"] = list(self.session.departments)
        return result
