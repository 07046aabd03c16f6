"""Tests for the ServerHandler dispatch layer."""

from __future__ import annotations

import pytest
import pytest_asyncio

from catalogbrowser.config.settings import Settings
from catalogbrowser.server.handler import ServerHandler
from catalogbrowser.server.protocol import Notification


@pytest.fixture
def notifications() -> list[Notification]:
    return []


@pytest.fixture
def handler(catalog_file, notifications):
    """A handler whose default data source is the sample catalog."""
    settings = Settings(data_source=str(catalog_file))
    return ServerHandler(settings=settings, write_notification=notifications.append)


@pytest_asyncio.fixture
async def ready_handler(handler, notifications):
    await handler.dispatch({"method": "bootstrap", "params": {}})
    notifications.clear()
    return handler


def _methods(notifications):
    return [n.method for n in notifications]


class TestBootstrap:
    @pytest.mark.asyncio
    async def test_default_source(self, handler, notifications):
        result = await handler.dispatch({"method": "bootstrap", "params": {}})
        assert result["phase"] == "ready"
        assert result["count"] == 5
        assert result["total"] == 5
        assert _methods(notifications) == ["departments", "courses", "count"]
        assert notifications[0].params == {"departments": ["BIO", "CS", "MATH", "cs"]}

    @pytest.mark.asyncio
    async def test_cards_serialized(self, handler, notifications):
        await handler.dispatch({"method": "bootstrap", "params": {}})
        courses = notifications[1].params
        assert courses["placeholder"] is None
        first = courses["cards"][0]
        assert first["code"] == "CS101"
        assert first["creditsLabel"] == "4 Credits"
        assert first["badges"][0] == {"kind": "level", "text": "Level 100"}
        assert first["badges"][-1] == {"kind": "prereq", "text": "No Prerequisites"}

    @pytest.mark.asyncio
    async def test_explicit_source_failure(self, handler, notifications, broken_catalog_file):
        result = await handler.dispatch({
            "method": "bootstrap",
            "params": {"source": str(broken_catalog_file)},
        })
        assert result["phase"] == "failed"
        assert "invalid JSON" in result["error"]
        assert _methods(notifications) == ["error"]
        assert notifications[0].params["title"] == "Error loading courses"

    @pytest.mark.asyncio
    async def test_twice(self, ready_handler):
        with pytest.raises(RuntimeError):
            await ready_handler.dispatch({"method": "bootstrap", "params": {}})


class TestCriteria:
    @pytest.mark.asyncio
    async def test_search_changed(self, ready_handler, notifications):
        result = await ready_handler.dispatch({"method": "searchChanged", "params": {"value": "cs"}})
        assert result["criteria"]["searchTerm"] == "cs"
        assert result["count"] == 4  # "genomics" matches too
        assert _methods(notifications) == ["courses", "count"]
        assert notifications[1].params == {"count": 4, "label": "4 courses"}

    @pytest.mark.asyncio
    async def test_department_and_level(self, ready_handler, notifications):
        await ready_handler.dispatch({"method": "departmentChanged", "params": {"value": "MATH"}})
        result = await ready_handler.dispatch({"method": "levelChanged", "params": {"value": "100"}})
        assert result["count"] == 0
        assert result["criteria"] == {"searchTerm": "", "department": "MATH", "levelBucket": 100}
        placeholder = notifications[-2].params["placeholder"]
        assert placeholder["kind"] == "no-results"
        assert notifications[-2].params["cards"] == []

    @pytest.mark.asyncio
    async def test_bad_level(self, ready_handler):
        with pytest.raises(ValueError):
            await ready_handler.dispatch({"method": "levelChanged", "params": {"value": "senior"}})

    @pytest.mark.asyncio
    async def test_non_string_search_rejected(self, ready_handler, notifications):
        await ready_handler.dispatch({"method": "departmentChanged", "params": {"value": "CS"}})
        notifications.clear()
        with pytest.raises(ValueError, match="search must be a string"):
            await ready_handler.dispatch({"method": "searchChanged", "params": {"value": 5}})
        state = await ready_handler.dispatch({"method": "getState", "params": {}})
        assert state["criteria"] == {"searchTerm": "", "department": "CS", "levelBucket": None}
        assert state["count"] == 2
        assert notifications == []

    @pytest.mark.asyncio
    async def test_fractional_level_rejected(self, ready_handler):
        with pytest.raises(ValueError, match="whole number"):
            await ready_handler.dispatch({"method": "levelChanged", "params": {"value": 250.7}})
        assert ready_handler.session.criteria.level_bucket is None

    @pytest.mark.asyncio
    async def test_numeric_level(self, ready_handler):
        result = await ready_handler.dispatch({"method": "levelChanged", "params": {"value": 300}})
        assert result["criteria"]["levelBucket"] == 300
        assert result["count"] == 1

    @pytest.mark.asyncio
    async def test_before_bootstrap_is_ignored(self, handler, notifications):
        result = await handler.dispatch({"method": "searchChanged", "params": {"value": "cs"}})
        assert result["phase"] == "uninitialized"
        assert notifications == []


class TestState:
    @pytest.mark.asyncio
    async def test_get_state(self, ready_handler):
        result = await ready_handler.dispatch({"method": "getState", "params": {}})
        assert result["phase"] == "ready"
        assert result["departments"] == ["BIO", "CS", "MATH", "cs"]

    @pytest.mark.asyncio
    async def test_unknown_method(self, handler):
        with pytest.raises(ValueError, match="Unknown method"):
            await handler.dispatch({"method": "nonExistent", "params": {}})
