"""Tag Schemas — public tag record."""

from devjournal.schemas.base import WireModel


class TagResponse(WireModel):
    id: int
    name: str
