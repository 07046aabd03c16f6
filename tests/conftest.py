"""Shared fixtures for catalog browser tests."""

from __future__ import annotations

import json

import pytest

from catalogbrowser.engine.catalog_loader import parse_catalog

SAMPLE_COURSES = [
    {
        "courseCode": "CS101",
        "title": "Intro to Programming",
        "department": "CS",
        "description": "Variables, loops and functions.",
        "level": 100,
        "credits": 4,
        "terms": ["Fall", "Spring"],
        "prerequisites": [],
    },
    {
        "courseCode": "MATH220",
        "title": "Linear Algebra",
        "department": "MATH",
        "description": "Vector spaces and matrices.",
        "level": 200,
        "credits": 3,
        "terms": ["Spring"],
        "prerequisites": ["MATH110"],
    },
    {
        "courseCode": "CS250",
        "title": "Data Structures",
        "department": "CS",
        "description": "Lists, trees, graphs and their analysis.",
        "level": 250,
        "credits": 3,
        "terms": [],
        "prerequisites": ["CS101", "MATH110"],
    },
    {
        "courseCode": "BIO300",
        "title": "Genetics",
        "department": "BIO",
        "description": "Mendelian inheritance and computational genomics.",
        "level": 300,
        "credits": 3.5,
        "terms": ["Fall"],
        "prerequisites": [],
    },
    {
        "courseCode": "cs299",
        "title": "Special Topics",
        "department": "cs",
        "description": "Lowercase department on purpose.",
        "level": 299,
        "credits": 1,
        "terms": ["Summer"],
        "prerequisites": [],
    },
]


class RecordingView:
    """Collects every view call for assertions."""

    def __init__(self):
        self.calls: list[tuple] = []

    def show_departments(self, departments):
        self.calls.append(("departments", list(departments)))

    def show_courses(self, courses):
        self.calls.append(("courses", [c.course_code for c in courses]))

    def show_count(self, count):
        self.calls.append(("count", count))

    def show_error(self):
        self.calls.append(("error",))

    def last(self, kind):
        for call in reversed(self.calls):
            if call[0] == kind:
                return call
        return None


@pytest.fixture
def sample_document():
    return {"courses": [dict(c) for c in SAMPLE_COURSES]}


@pytest.fixture
def catalog(sample_document):
    return parse_catalog(sample_document)


@pytest.fixture
def catalog_file(tmp_path, sample_document):
    path = tmp_path / "courses.json"
    path.write_text(json.dumps(sample_document), encoding="utf-8")
    return path


@pytest.fixture
def empty_catalog_file(tmp_path):
    path = tmp_path / "empty.json"
    path.write_text(json.dumps({"courses": []}), encoding="utf-8")
    return path


@pytest.fixture
def broken_catalog_file(tmp_path):
    path = tmp_path / "broken.json"
    path.write_text("{not json", encoding="utf-8")
    return path


@pytest.fixture
def latin1_catalog_file(tmp_path, sample_document):
    """A well-formed catalog saved in latin-1 rather than UTF-8."""
    sample_document["courses"][0]["title"] = "Caf\xe9 Culture"
    path = tmp_path / "latin1.json"
    path.write_bytes(json.dumps(sample_document, ensure_ascii=False).encode("latin-1"))
    return path


@pytest.fixture
def numeric_terms_catalog_file(tmp_path, sample_document):
    sample_document["courses"][0]["terms"] = 5
    path = tmp_path / "numeric_terms.json"
    path.write_text(json.dumps(sample_document), encoding="utf-8")
    return path


@pytest.fixture
def recording_view():
    return RecordingView()
