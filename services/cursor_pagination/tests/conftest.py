from dataclasses import dataclass

import pytest

from services.cursor_pagination.scope import InMemoryScope
from services.cursor_pagination.settings import reset_settings


@dataclass
class Record:
    id: int
    name: str = ""


@pytest.fixture(autouse=True)
def fresh_settings(monkeypatch):
    """Keep environment-driven settings from leaking between tests."""
    for name in (
        "PAGINATION_PROFILE_URL",
        "PAGINATION_LOG_LEVEL",
        "PAGINATION_LOG_FORMAT",
        "LOG_LEVEL",
        "LOG_FORMAT",
    ):
        monkeypatch.delenv(name, raising=False)
    reset_settings()
    yield
    reset_settings()


@pytest.fixture
def records():
    """Ten records with ids 1..10, stored out of order."""
    ids = [4, 9, 1, 7, 10, 2, 6, 3, 8, 5]
    return [Record(id=i, name=f"record-{i}") for i in ids]


@pytest.fixture
def scope(records):
    return InMemoryScope(records)
