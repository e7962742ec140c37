"""Entry Schemas — Pydantic models with field-level validation for API boundaries.

Invariants:
    - EntryCreate.content: stripped, non-empty
    - time_spent >= 0 minutes; confidence bounded 1-5; both coerced to int
    - tags: JSON list or comma-joined string, normalized (stripped, deduped, case kept),
      each name at most MAX_TAG_NAME_LENGTH chars (reported as tags.<index>)
    - EntryUpdate distinguishes "field omitted" from "field sent": tags=[] clears,
      tags omitted (or null) leaves associations untouched. Same for projectIds
    - Non-nullable columns (content, date, timeSpent, confidence) reject explicit null on update

Design Decisions:
    - model_fields_set drives partial updates: only fields the client sent are written
    - owner_id and created_at are absent from input schemas (server-assigned, never trusted)
"""

from datetime import datetime
from typing import Annotated, Any

from pydantic import Field, StringConstraints, field_validator

from devjournal.core.domain_types import (
    MIN_CONFIDENCE, MAX_CONFIDENCE, DEFAULT_CONFIDENCE, DEFAULT_TIME_SPENT,
    MAX_TAG_NAME_LENGTH,
)
from devjournal.core.tag_names import normalize_tag_names, split_tag_string
from devjournal.schemas.base import WireModel
from devjournal.schemas.project import ProjectResponse

_ASSOCIATION_FIELDS = {"tags", "project_ids"}
_NON_NULLABLE_ON_UPDATE = ("content", "date", "time_spent", "confidence")

TagName = Annotated[
    str, StringConstraints(strip_whitespace=True, max_length=MAX_TAG_NAME_LENGTH),
]


def _coerce_tag_input(v: Any) -> Any:
    if isinstance(v, str):
        return split_tag_string(v)
    return v


def _dedupe_ids(ids: list[int]) -> list[int]:
    return list(dict.fromkeys(ids))


class EntryCreate(WireModel):
    """Entry creation — content required, everything else optional with defaults."""
    content: str = Field(min_length=1, max_length=20_000)
    date: datetime | None = None
    bug: str | None = Field(None, max_length=20_000)
    solution: str | None = Field(None, max_length=20_000)
    time_spent: int = Field(DEFAULT_TIME_SPENT, ge=0)
    confidence: int = Field(DEFAULT_CONFIDENCE, ge=MIN_CONFIDENCE, le=MAX_CONFIDENCE)
    notes: str | None = Field(None, max_length=20_000)
    tags: list[TagName] | None = None
    project_ids: list[int] | None = None

    @field_validator("content")
    @classmethod
    def strip_content(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("content cannot be empty or whitespace")
        return v

    @field_validator("tags", mode="before")
    @classmethod
    def split_tags(cls, v: Any) -> Any:
        return _coerce_tag_input(v)

    @field_validator("tags")
    @classmethod
    def normalize_tags(cls, v: list[str] | None) -> list[str] | None:
        return None if v is None else normalize_tag_names(v)

    @field_validator("project_ids")
    @classmethod
    def dedupe_project_ids(cls, v: list[int] | None) -> list[int] | None:
        return None if v is None else _dedupe_ids(v)

    def entry_fields(self) -> dict[str, Any]:
        """Column values for the new row (associations excluded, unset date omitted)."""
        fields = self.model_dump(exclude=_ASSOCIATION_FIELDS)
        if fields["date"] is None:
            del fields["date"]
        return fields


class EntryUpdate(WireModel):
    """Partial entry update — every field optional, only sent fields applied."""
    content: str | None = Field(None, min_length=1, max_length=20_000)
    date: datetime | None = None
    bug: str | None = Field(None, max_length=20_000)
    solution: str | None = Field(None, max_length=20_000)
    time_spent: int | None = Field(None, ge=0)
    confidence: int | None = Field(None, ge=MIN_CONFIDENCE, le=MAX_CONFIDENCE)
    notes: str | None = Field(None, max_length=20_000)
    tags: list[TagName] | None = None
    project_ids: list[int] | None = None

    @field_validator(*_NON_NULLABLE_ON_UPDATE, mode="before")
    @classmethod
    def reject_null(cls, v: Any) -> Any:
        if v is None:
            raise ValueError("field cannot be null")
        return v

    @field_validator("content")
    @classmethod
    def strip_content(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("content cannot be empty or whitespace")
        return v

    @field_validator("tags", mode="before")
    @classmethod
    def split_tags(cls, v: Any) -> Any:
        return _coerce_tag_input(v)

    @field_validator("tags")
    @classmethod
    def normalize_tags(cls, v: list[str] | None) -> list[str] | None:
        return None if v is None else normalize_tag_names(v)

    @field_validator("project_ids")
    @classmethod
    def dedupe_project_ids(cls, v: list[int] | None) -> list[int] | None:
        return None if v is None else _dedupe_ids(v)

    def entry_fields(self) -> dict[str, Any]:
        """Only the column values the client actually sent."""
        return self.model_dump(exclude_unset=True, exclude=_ASSOCIATION_FIELDS)


class EntryResponse(WireModel):
    """Bare entry row as returned by create/update."""
    id: int
    owner_id: str = Field(serialization_alias="userId")
    date: datetime
    content: str
    bug: str | None = None
    solution: str | None = None
    time_spent: int
    confidence: int
    notes: str | None = None
    created_at: datetime


class EnrichedEntryResponse(EntryResponse):
    """Entry plus resolved tag names and full linked project records."""
    tags: list[str] = []
    projects: list[ProjectResponse] = []
