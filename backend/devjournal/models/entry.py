"""Entry ORM — persists one journal record of a learning event.

Invariants:
    - owner_id is the opaque identity of the creating user; never changes
    - content is non-nullable text ("what was learned")
    - confidence is 1-5 (enforced at the wire boundary), time_spent in minutes
    - created_at assigned server-side, immutable; date defaults to creation time

Design Decisions:
    - Integer serial id: the web client addresses entries and projects numerically
    - No ORM collections for tags/projects: the association manager owns the join
      tables explicitly, keeping every join read an awaited query (no async lazy loads)
    - Composite index (owner_id, date): list() filters by owner and sorts by date
"""

from datetime import datetime, timezone

from sqlalchemy import String, Text, Integer, DateTime, Index
from sqlalchemy.orm import Mapped, mapped_column

from devjournal.core.domain_types import DEFAULT_CONFIDENCE, DEFAULT_TIME_SPENT
from devjournal.db.base import Base


class Entry(Base):
    """Journal entry — owned exclusively by its creating user."""
    __tablename__ = "entries"
    __table_args__ = (
        Index("ix_entries_owner_id_date", "owner_id", "date"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    owner_id: Mapped[str] = mapped_column(String(255), nullable=False)
    date: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )
    content: Mapped[str] = mapped_column(Text, nullable=False)
    bug: Mapped[str | None] = mapped_column(Text, nullable=True)
    solution: Mapped[str | None] = mapped_column(Text, nullable=True)
    time_spent: Mapped[int] = mapped_column(
        Integer, nullable=False, default=DEFAULT_TIME_SPENT,
    )
    confidence: Mapped[int] = mapped_column(
        Integer, nullable=False, default=DEFAULT_CONFIDENCE,
    )
    notes: Mapped[str | None] = mapped_column(Text, nullable=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )
