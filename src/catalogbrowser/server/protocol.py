"""JSON-lines messages for the stdio bridge."""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Optional


@dataclass
class Request:
    """One request line: ``{"id": ..., "method": ..., "params": {...}}``."""
    id: int
    method: str
    params: dict = field(default_factory=dict)

    @classmethod
    def from_dict(cls, data: dict) -> Request:
        return cls(
            id=data.get("id", 0),
            method=data["method"],
            params=data.get("params") or {},
        )

    @classmethod
    def from_line(cls, line: str) -> Request:
        """Parse a raw line. Raises ``ValueError`` on malformed input."""
        data = json.loads(line)
        if not isinstance(data, dict) or "method" not in data:
            raise ValueError("Request must be an object with a 'method'")
        if not isinstance(data.get("params") or {}, dict):
            raise ValueError("Request params must be an object")
        return cls.from_dict(data)


class NotificationMethod(str, Enum):
    """The view updates a session pushes to the client."""
    DEPARTMENTS = "departments"
    COURSES = "courses"
    COUNT = "count"
    ERROR = "error"


@dataclass
class Response:
    """Reply to a request: the session state, or an error string."""
    id: int
    result: Optional[dict] = None
    error: Optional[str] = None

    @classmethod
    def invalid_line(cls, error: Exception) -> Response:
        # The id of an unreadable line is unknown
        return cls(id=0, error=f"Invalid request: {error}")

    @classmethod
    def failed(cls, req: Request, error: Exception) -> Response:
        return cls(id=req.id, error=f"{req.method} failed: {error}")

    def to_json_line(self) -> str:
        d: dict[str, Any] = {"id": self.id}
        if self.error is not None:
            d["error"] = self.error
        else:
            d["result"] = self.result
        return json.dumps(d) + "\n"


@dataclass
class Notification:
    """Pushed by the session when the view changes; never answered."""
    method: NotificationMethod
    params: dict = field(default_factory=dict)

    def __post_init__(self):
        # Raises ValueError for a method outside the set
        self.method = NotificationMethod(self.method)

    def to_json_line(self) -> str:
        return json.dumps({"method": self.method.value, "params": self.params}) + "\n"
