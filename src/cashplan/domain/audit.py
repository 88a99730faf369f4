"""Append-only audit trail of planning mutations."""

from uuid import uuid4

from cashplan.domain.clock import Clock
from cashplan.domain.entities import LogEntry
from cashplan.logging_config import get_logger

logger = get_logger("audit")


class AuditLog:
    """Session-lifetime audit trail. Entries are never edited or removed."""

    def __init__(self, clock: Clock):
        self.clock = clock
        self._entries: list[LogEntry] = []

    def append(self, message: str) -> LogEntry:
        """Record a message and return the new entry."""
        entry = LogEntry(id=uuid4().hex[:12], timestamp=self.clock.now(), message=message)
        self._entries.append(entry)
        logger.info(message, extra={"audit_id": entry.id})
        return entry

    def entries(self) -> tuple[LogEntry, ...]:
        return tuple(self._entries)

    def render(self) -> str:
        """Plain-text print view, one line per entry."""
        return "\n".join(
            f"[{entry.timestamp:%Y-%m-%d %H:%M:%S}] {entry.message}" for entry in self._entries
        )

    def __len__(self) -> int:
        return len(self._entries)
