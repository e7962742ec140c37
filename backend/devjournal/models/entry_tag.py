"""EntryTag ORM — join row linking an entry to a tag.

Invariants:
    - At most one row per (entry_id, tag_id): composite primary key
    - Deleting an entry or tag cascades to its join rows at the DB level

Design Decisions:
    - Secondary index on tag_id: entry_id lookups use the primary key prefix
"""

from sqlalchemy import Integer, ForeignKey
from sqlalchemy.orm import Mapped, mapped_column

from devjournal.db.base import Base


class EntryTag(Base):
    """Entry <-> Tag association."""
    __tablename__ = "entry_tags"

    entry_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("entries.id", ondelete="CASCADE"), primary_key=True,
    )
    tag_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("tags.id", ondelete="CASCADE"), primary_key=True,
        index=True,
    )
