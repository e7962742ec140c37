"""AI Advisor — model-backed summaries with static fallback."""

from datetime import datetime, timezone

from devjournal.config import Settings
from devjournal.core.errors import AnthropicAPIError
from devjournal.models.entry import Entry
from devjournal.models.project import Project
from devjournal.services.ai_advisor import (
    DISABLED_SUMMARY, EMPTY_SUMMARY,
    AnthropicAdvisor, StaticAdvisor, build_advisor, format_entries,
)
from devjournal.services.entry_repository import EnrichedEntry
from tests.services.mock_anthropic import (
    MockAnthropicClient, make_json_response, make_text_response,
)


def _entries() -> list[EnrichedEntry]:
    entry = Entry(
        owner_id="alice",
        date=datetime(2025, 3, 1, tzinfo=timezone.utc),
        content="Learned closures",
        bug="stale state in callback",
        solution="functional setState",
        time_spent=45,
        confidence=2,
    )
    return [EnrichedEntry(
        entry=entry, tags=["React", "js"],
        projects=[Project(owner_id="alice", name="App")],
    )]


async def test_static_advisor_returns_placeholders():
    advisor = StaticAdvisor()
    summary = await advisor.summarize(_entries())
    steps = await advisor.suggest_next(_entries())
    assert summary.summary == DISABLED_SUMMARY
    assert summary.insights == []
    assert steps.suggestions == []


async def test_summarize_parses_model_json():
    client = MockAnthropicClient([make_json_response(
        {"summary": "Worked on React state.", "insights": ["Review hooks"]},
    )])
    advisor = AnthropicAdvisor(client, "test-model")
    result = await advisor.summarize(_entries())
    assert result.summary == "Worked on React state."
    assert result.insights == ["Review hooks"]
    assert client.calls[0]["model"] == "test-model"
    assert "Learned closures" in client.calls[0]["messages"][0]["content"]


async def test_summarize_tolerates_code_fence():
    client = MockAnthropicClient([make_json_response(
        {"summary": "Fenced.", "insights": []}, fenced=True,
    )])
    result = await AnthropicAdvisor(client, "m").summarize(_entries())
    assert result.summary == "Fenced."


async def test_summarize_without_entries_skips_model():
    client = MockAnthropicClient([])
    result = await AnthropicAdvisor(client, "m").summarize([])
    assert result.summary == EMPTY_SUMMARY
    assert client.calls == []


async def test_summarize_falls_back_on_api_error():
    client = MockAnthropicClient([AnthropicAPIError("boom", "connection_error")])
    result = await AnthropicAdvisor(client, "m").summarize(_entries())
    assert result.summary == DISABLED_SUMMARY


async def test_summarize_falls_back_on_malformed_reply():
    client = MockAnthropicClient([make_text_response("not json at all")])
    result = await AnthropicAdvisor(client, "m").summarize(_entries())
    assert result.summary == DISABLED_SUMMARY


async def test_suggest_next_parses_suggestions():
    client = MockAnthropicClient([make_json_response(
        {"suggestions": ["Practice useReducer", "Read about closures"]},
    )])
    result = await AnthropicAdvisor(client, "m").suggest_next(_entries())
    assert result.suggestions == ["Practice useReducer", "Read about closures"]


async def test_suggest_next_falls_back_on_missing_key():
    client = MockAnthropicClient([make_json_response({"ideas": ["x"]})])
    result = await AnthropicAdvisor(client, "m").suggest_next(_entries())
    assert result.suggestions == []


def test_format_entries_includes_tags_and_projects():
    text = format_entries(_entries())
    assert "2025-03-01 | 45 min | confidence 2/5" in text
    assert "bug: stale state in callback" in text
    assert "tags: React, js" in text
    assert "projects: App" in text


def test_build_advisor_static_when_disabled():
    assert isinstance(build_advisor(Settings(ai_enabled=False)), StaticAdvisor)


def test_build_advisor_anthropic_when_enabled():
    advisor = build_advisor(Settings(ai_enabled=True, anthropic_model="m"))
    assert isinstance(advisor, AnthropicAdvisor)
    assert advisor.model == "m"
