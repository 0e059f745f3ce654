"""Root conftest - shared test configuration and fixtures.

Invariants:
    - Every test gets a fresh DocumentStore (no state shared between tests)
    - Plain-text logs in tests; JSON output is exercised in its own test module
"""

import os
from datetime import datetime, timedelta, timezone

import pytest

os.environ.setdefault("LOG_FORMAT", "text")
os.environ.setdefault("LOG_LEVEL", "DEBUG")

from messageboard.infrastructure.document_store import DocumentStore  # noqa: E402


@pytest.fixture
def store():
    return DocumentStore()


@pytest.fixture
def threads(store):
    return store.collection("threads")


@pytest.fixture
def clock():
    """Deterministic clock: each call is one second later than the previous."""
    start = datetime(2024, 1, 1, tzinfo=timezone.utc)
    ticks = {"n": 0}

    def _now() -> datetime:
        ticks["n"] += 1
        return start + timedelta(seconds=ticks["n"])

    return _now
