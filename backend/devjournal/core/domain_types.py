"""Domain Types — rich types that replace bare primitives across the codebase.

Invariants:
    - EntryId, ProjectId, TagId wrap integer primary keys
    - OwnerId is opaque: produced by the auth collaborator, never parsed
    - Confidence is bounded MIN_CONFIDENCE..MAX_CONFIDENCE
    - All valid states encoded as Enums, no raw string matching

Design Decisions:
    - NewType over dataclass wrappers: zero runtime cost, full type-checker support
    - str Enums: serialize to JSON without custom encoders
"""

from enum import Enum
from typing import NewType


# ─── Identity Types ──────────────────────────────────────────────

OwnerId = NewType("OwnerId", str)
EntryId = NewType("EntryId", int)
ProjectId = NewType("ProjectId", int)
TagId = NewType("TagId", int)


# ─── Value Bounds ────────────────────────────────────────────────

MIN_CONFIDENCE = 1
MAX_CONFIDENCE = 5
DEFAULT_CONFIDENCE = 3
DEFAULT_TIME_SPENT = 0  # minutes
MAX_TAG_NAME_LENGTH = 255  # tags.name column width


# ─── Enums ───────────────────────────────────────────────────────

class TimeRange(str, Enum):
    """Window of entries fed to the AI summary."""
    DAILY = "daily"
    WEEKLY = "weekly"
