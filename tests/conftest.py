"""Shared test fixtures and configuration."""

import os

import pytest


TEST_ENV = {
    "FIELD_RANK_LOG_LEVEL": "warning",
    "FIELD_RANK_JSON_LOGS": "false",
    # Tests opt in to parameter files explicitly
    "FIELD_RANK_WRITE_PARAMETER_FILE": "false",
    "FIELD_RANK_PARAMETER_FILE": "bm25Para.txt",
}

for key, value in TEST_ENV.items():
    os.environ[key] = value

from field_rank.scoring.models import Document, Query


@pytest.fixture(autouse=True)
def clean_environment(monkeypatch):
    """Pin FIELD_RANK_* variables for every test."""
    for key in list(os.environ):
        if key.startswith("FIELD_RANK_") and key not in TEST_ENV:
            monkeypatch.delenv(key, raising=False)
    for key, value in TEST_ENV.items():
        monkeypatch.setenv(key, value)


@pytest.fixture
def people_page() -> Document:
    """Document with every field populated.

    Field lengths: url 7, title 3, body 100, header 4, anchor 5.
    """
    return Document(
        url="http://cs.stanford.edu/people/index.html",
        title="Stanford CS People",
        body_length=100,
        headers=("People", "Faculty and staff"),
        anchors={"stanford cs": 2, "people": 1},
        page_rank=1.0,
        body_hits={"stanford": (3, 9, 40)},
    )


@pytest.fixture
def bare_page() -> Document:
    """Document with only a body."""
    return Document(url=None, body_length=50, page_rank=0.0)


@pytest.fixture
def people_query() -> Query:
    return Query.from_text("Stanford people")


@pytest.fixture
def corpus(people_page: Document, bare_page: Document, people_query: Query) -> dict[Query, dict[str, Document]]:
    return {people_query: {"people": people_page, "bare": bare_page}}
