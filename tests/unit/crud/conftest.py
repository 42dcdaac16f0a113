"""Shared fixtures for crud unit tests"""

from datetime import datetime

import pytest
from sqlalchemy import create_engine
from sqlmodel import SQLModel, Session

from vibecoder.crud import tables  # noqa: F401
from vibecoder.session.history import SessionEntry


@pytest.fixture(name="engine")
def engine_fixture():
    """In-memory SQLite engine with all tables created."""
    engine = create_engine("sqlite://", connect_args={"check_same_thread": False})
    SQLModel.metadata.create_all(engine)
    yield engine
    SQLModel.metadata.drop_all(engine)


@pytest.fixture(name="session")
def session_fixture(engine):
    """Fresh session per test; changes are not committed."""
    with Session(engine) as s:
        yield s


@pytest.fixture(name="make_entry")
def make_entry_fixture():
    """Factory for entries with distinct, increasing timestamps."""
    def _make(i: int, prompt: str = None, response: str = None) -> SessionEntry:
        return SessionEntry(
            id=f"entry-{i:03d}",
            timestamp=datetime(2026, 1, 1, 10, 0, i),
            user_prompt=prompt or f"Prompt {i}",
            ai_response=response or f"Response {i}",
            provider="Mock Provider",
            model="mock-model-v1",
            tokens_used=150,
        )
    return _make
