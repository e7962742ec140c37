"""ORM Models — SQLAlchemy declarative models for all journal entities.

Invariants:
    - All models inherit from Base (db/base.py)
    - Entry and Project are owner-scoped; Tag is global

Design Decisions:
    - One file per entity for locality
    - All models imported here so Base.metadata is complete before create_all / autogenerate
"""

from devjournal.models.entry import Entry  # noqa: F401
from devjournal.models.project import Project  # noqa: F401
from devjournal.models.tag import Tag  # noqa: F401
from devjournal.models.entry_tag import EntryTag  # noqa: F401
from devjournal.models.entry_project import EntryProject  # noqa: F401
