"""Project Schemas — project creation input and public project record.

Invariants:
    - ProjectCreate.name: stripped, non-empty, <= 200 chars
    - owner_id serialized as `userId` (wire name used by the web client)
"""

from datetime import datetime

from pydantic import Field, field_validator

from devjournal.schemas.base import WireModel


class ProjectCreate(WireModel):
    """Project creation — name required, description and repo URL optional."""
    name: str = Field(min_length=1, max_length=200)
    description: str | None = Field(None, max_length=5000)
    repo_url: str | None = Field(None, max_length=2000)

    @field_validator("name")
    @classmethod
    def strip_name(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("name cannot be empty or whitespace")
        return v


class ProjectResponse(WireModel):
    """Public project record."""
    id: int
    owner_id: str = Field(serialization_alias="userId")
    name: str
    description: str | None = None
    repo_url: str | None = None
    created_at: datetime
