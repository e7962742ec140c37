"""Tag ORM — a globally unique label shared by all users.

Invariants:
    - name is unique across the whole system (exact, case-sensitive match)
    - Tags are never deleted by the application; orphans persist

Design Decisions:
    - Unique constraint is what makes get-or-create atomic (INSERT ... ON CONFLICT DO NOTHING)
"""

from sqlalchemy import Integer, String, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from devjournal.core.domain_types import MAX_TAG_NAME_LENGTH
from devjournal.db.base import Base


class Tag(Base):
    """Shared vocabulary label."""
    __tablename__ = "tags"
    __table_args__ = (
        UniqueConstraint("name", name="uq_tags_name"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(MAX_TAG_NAME_LENGTH), nullable=False)
