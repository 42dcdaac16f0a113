"""Session entry persistence: save with pruning, list, search, lookup, clear"""

from sqlmodel import Session, col, select

from vibecoder.crud.tables import SessionRecord
from vibecoder.session.history import SessionEntry, SessionHistory
from vibecoder.util.logger import get_logger


logger = get_logger(__name__)


def _to_record(entry: SessionEntry) -> SessionRecord:
    return SessionRecord(**entry.model_dump())


def _to_entry(record: SessionRecord) -> SessionEntry:
    return SessionEntry.model_validate(record.model_dump())


def _ordered():
    return select(SessionRecord).order_by(col(SessionRecord.timestamp).asc(), col(SessionRecord.id).asc())


def prune_entries(session: Session, max_history: int) -> int:
    """Delete oldest entries beyond max_history. Returns count deleted."""
    records = session.exec(_ordered()).all()
    excess = len(records) - max_history
    if excess <= 0:
        return 0

    for r in records[:excess]:
        session.delete(r)
    session.flush()
    logger.debug("Pruned %d session entries", excess)
    return excess


def save_entry(session: Session, entry: SessionEntry, max_history: int = 100) -> SessionRecord:
    """Insert entry, then prune the oldest beyond max_history.

    Flushes but does not commit; caller controls the transaction.
    """
    record = _to_record(entry)
    session.add(record)
    session.flush()
    prune_entries(session, max_history)
    return record


def list_entries(session: Session, limit: int | None = None) -> list[SessionEntry]:
    """Return stored entries oldest first; with limit, only the most recent `limit`."""
    entries = [_to_entry(r) for r in session.exec(_ordered()).all()]
    if limit:
        return entries[-limit:]
    return entries


def search_entries(session: Session, query: str) -> list[SessionEntry]:
    """Entries whose prompt or response contains query, oldest first."""
    return [e for e in list_entries(session) if query in e.user_prompt or query in e.ai_response]


def get_entry(session: Session, entry_id: str) -> SessionEntry | None:
    record = session.get(SessionRecord, entry_id)
    return _to_entry(record) if record else None


def clear_entries(session: Session) -> int:
    """Delete every stored entry. Returns count deleted."""
    records = session.exec(select(SessionRecord)).all()
    for r in records:
        session.delete(r)
    session.flush()
    return len(records)


def load_history(session: Session, max_size: int) -> SessionHistory:
    """Build an in-memory SessionHistory from the most recent stored entries."""
    return SessionHistory(max_size, list_entries(session, limit=max_size))
