"""Session-scoped context shared by the domain services."""

from __future__ import annotations

from typing import TYPE_CHECKING, Optional
from uuid import uuid4

from cashplan.domain.audit import AuditLog
from cashplan.domain.clock import Clock, SystemClock

if TYPE_CHECKING:
    from cashplan.database.base import Database


class PlanningSession:
    """One planning session: the transaction store, its audit trail and clock.

    Owned by the top-level controller (the CLI, or a test) and passed
    explicitly into every service.
    """

    def __init__(self, db: Database, clock: Optional[Clock] = None):
        self.db = db
        self.clock = clock or SystemClock()
        self.audit = AuditLog(self.clock)

    @classmethod
    def in_memory(cls, clock: Optional[Clock] = None) -> PlanningSession:
        """Create a session backed by a fresh in-memory store."""
        from cashplan.database.factories import create_memory_database

        db = create_memory_database()
        db.connect()
        return cls(db, clock=clock)

    def new_id(self) -> str:
        """Generate a fresh transaction identifier."""
        return uuid4().hex[:12]

    def close(self) -> None:
        self.db.disconnect()
