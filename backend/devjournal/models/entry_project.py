"""EntryProject ORM — join row linking an entry to a project.

Invariants:
    - At most one row per (entry_id, project_id): composite primary key
    - Deleting an entry or project cascades to its join rows at the DB level
"""

from sqlalchemy import Integer, ForeignKey
from sqlalchemy.orm import Mapped, mapped_column

from devjournal.db.base import Base


class EntryProject(Base):
    """Entry <-> Project association."""
    __tablename__ = "entry_projects"

    entry_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("entries.id", ondelete="CASCADE"), primary_key=True,
    )
    project_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("projects.id", ondelete="CASCADE"), primary_key=True,
        index=True,
    )
