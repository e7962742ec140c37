"""AI Schemas — summary and next-step suggestion contracts.

Invariants:
    - Responses always well-formed: advisor failures fall back to static defaults
"""

from devjournal.core.domain_types import TimeRange
from devjournal.schemas.base import WireModel


class SummaryRequest(WireModel):
    time_range: TimeRange = TimeRange.DAILY


class SummaryResponse(WireModel):
    summary: str
    insights: list[str] = []


class NextStepsResponse(WireModel):
    suggestions: list[str] = []
