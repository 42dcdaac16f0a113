"""Bounded in-memory session history with JSON persistence"""

from collections import deque
from datetime import datetime
from pathlib import Path
from typing import Iterable, Optional
from uuid import uuid4

from pydantic import BaseModel, Field


class SessionEntry(BaseModel):
    """One prompt/response interaction."""
    id:          str = Field(default_factory=lambda: uuid4().hex)
    timestamp:   datetime = Field(default_factory=datetime.now)
    user_prompt: str
    ai_response: str
    provider:    str
    model:       Optional[str] = None
    tokens_used: Optional[int] = None


class HistorySnapshot(BaseModel):
    """On-disk JSON shape of a SessionHistory."""
    max_size: int = Field(..., ge=1)
    entries:  list[SessionEntry] = Field(default_factory=list)


class SessionHistory:
    """Ring buffer of SessionEntry; adding past max_size evicts the oldest entry."""

    def __init__(self, max_size: int = 100, entries: Iterable[SessionEntry] = ()):
        if max_size < 1:
            raise ValueError(f"max_size must be >= 1, got {max_size}")
        self.max_size = max_size
        self._entries: deque[SessionEntry] = deque(entries, maxlen=max_size)

    def add(self, entry: SessionEntry) -> None:
        self._entries.append(entry)

    def entries(self) -> list[SessionEntry]:
        """Oldest first."""
        return list(self._entries)

    def clear(self) -> None:
        self._entries.clear()

    def __len__(self) -> int:
        return len(self._entries)

    def get(self, entry_id: str) -> Optional[SessionEntry]:
        return next((e for e in self._entries if e.id == entry_id), None)

    def search(self, query: str) -> list[SessionEntry]:
        """Entries whose prompt or response contains query (case-sensitive)."""
        return [e for e in self._entries if query in e.user_prompt or query in e.ai_response]

    def save(self, path: Path) -> None:
        snapshot = HistorySnapshot(max_size=self.max_size, entries=self.entries())
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(snapshot.model_dump_json(indent=2), encoding='utf-8')

    @classmethod
    def load(cls, path: Path) -> "SessionHistory":
        snapshot = HistorySnapshot.model_validate_json(path.read_text(encoding='utf-8'))
        return cls(snapshot.max_size, snapshot.entries)
