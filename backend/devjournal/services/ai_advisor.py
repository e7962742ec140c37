"""AI Advisor — summary and next-step suggestions over a user's journal entries.

Invariants:
    - summarize()/suggest_next() never raise: any model or parsing failure falls back
      to the static default
    - StaticAdvisor is the default (ai_enabled=False) and returns fixed placeholders
    - Only entry text fields, tags and project names are sent to the model

Design Decisions:
    - Protocol over base class: routes depend on the two-method contract only
    - The model is asked for a bare JSON object; markdown fences are tolerated
"""

import json
import logging
from typing import Protocol

from devjournal.config import Settings
from devjournal.core.errors import AnthropicAPIError
from devjournal.infrastructure.anthropic_client import ResilientAnthropicClient
from devjournal.schemas.ai import NextStepsResponse, SummaryResponse
from devjournal.services.entry_repository import EnrichedEntry

logger = logging.getLogger(__name__)

DISABLED_SUMMARY = "AI features are disabled in local development."
EMPTY_SUMMARY = "No journal entries in this period."

SUMMARY_SYSTEM_PROMPT = (
    "You review a software developer's learning journal. Reply with a JSON object "
    '{"summary": string, "insights": [string, ...]} and nothing else. '
    "The summary is 2-3 sentences; give at most 5 short insights."
)
NEXT_STEPS_SYSTEM_PROMPT = (
    "You review a software developer's learning journal. Reply with a JSON object "
    '{"suggestions": [string, ...]} and nothing else, listing at most 5 concrete '
    "topics or exercises to study next, based on low-confidence areas and open bugs."
)


class AIAdvisor(Protocol):
    async def summarize(self, entries: list[EnrichedEntry]) -> SummaryResponse: ...

    async def suggest_next(self, entries: list[EnrichedEntry]) -> NextStepsResponse: ...


class StaticAdvisor:
    """Fixed placeholder responses."""

    async def summarize(self, entries: list[EnrichedEntry]) -> SummaryResponse:
        return SummaryResponse(summary=DISABLED_SUMMARY, insights=[])

    async def suggest_next(self, entries: list[EnrichedEntry]) -> NextStepsResponse:
        return NextStepsResponse(suggestions=[])


class AnthropicAdvisor:
    """Model-backed advisor with static fallback."""

    def __init__(
        self,
        client: ResilientAnthropicClient,
        model: str,
        fallback: AIAdvisor | None = None,
        max_tokens: int = 1024,
    ):
        self.client = client
        self.model = model
        self.fallback = fallback or StaticAdvisor()
        self.max_tokens = max_tokens

    async def summarize(self, entries: list[EnrichedEntry]) -> SummaryResponse:
        if not entries:
            return SummaryResponse(summary=EMPTY_SUMMARY, insights=[])
        try:
            payload = await self._ask(SUMMARY_SYSTEM_PROMPT, entries)
            return SummaryResponse(
                summary=str(payload["summary"]),
                insights=[str(i) for i in payload.get("insights", [])],
            )
        except (AnthropicAPIError, ValueError, KeyError, TypeError, AttributeError) as e:
            logger.warning(f"AI summary failed, using fallback: {e}")
            return await self.fallback.summarize(entries)

    async def suggest_next(self, entries: list[EnrichedEntry]) -> NextStepsResponse:
        if not entries:
            return await self.fallback.suggest_next(entries)
        try:
            payload = await self._ask(NEXT_STEPS_SYSTEM_PROMPT, entries)
            return NextStepsResponse(
                suggestions=[str(s) for s in payload["suggestions"]],
            )
        except (AnthropicAPIError, ValueError, KeyError, TypeError, AttributeError) as e:
            logger.warning(f"AI next-steps failed, using fallback: {e}")
            return await self.fallback.suggest_next(entries)

    async def _ask(self, system: str, entries: list[EnrichedEntry]) -> dict:
        response = await self.client.create_message(
            model=self.model,
            max_tokens=self.max_tokens,
            system=system,
            messages=[{"role": "user", "content": format_entries(entries)}],
        )
        text = "".join(
            block.text for block in response.content
            if getattr(block, "type", None) == "text"
        )
        return json.loads(_strip_code_fence(text))


def format_entries(entries: list[EnrichedEntry]) -> str:
    """Render entries as a compact plain-text digest for the model."""
    lines = []
    for item in entries:
        e = item.entry
        lines.append(
            f"- {e.date:%Y-%m-%d} | {e.time_spent} min | confidence {e.confidence}/5"
        )
        lines.append(f"  learned: {e.content}")
        if e.bug:
            lines.append(f"  bug: {e.bug}")
        if e.solution:
            lines.append(f"  solution: {e.solution}")
        if item.tags:
            lines.append(f"  tags: {', '.join(item.tags)}")
        if item.projects:
            lines.append(f"  projects: {', '.join(p.name for p in item.projects)}")
    return "\n".join(lines)


def _strip_code_fence(text: str) -> str:
    text = text.strip()
    if text.startswith("```"):
        text = text.split("\n", 1)[1] if "\n" in text else ""
        text = text.rsplit("```", 1)[0]
    return text.strip()


def build_advisor(settings: Settings) -> AIAdvisor:
    """Advisor selected by settings.ai_enabled."""
    if not settings.ai_enabled:
        return StaticAdvisor()
    client = ResilientAnthropicClient(
        api_key=settings.anthropic_api_key,
        max_retries=settings.anthropic_max_retries,
        base_delay_ms=settings.anthropic_base_delay_ms,
        max_delay_ms=settings.anthropic_max_delay_ms,
        timeout_seconds=settings.anthropic_timeout_seconds,
    )
    return AnthropicAdvisor(client, settings.anthropic_model)
