"""Journal Service — aggregation facade: ownership checks, commits, wire shapes.

Invariants:
    - Foreign and missing ids both raise ResourceNotFoundError
    - projectIds outside the caller's projects raise InputValidationError(field="projectIds")
      and write nothing
    - entries_in_window() keeps only entries dated inside the window
"""

from datetime import datetime, timedelta, timezone

import pytest
from sqlalchemy import func, select

from devjournal.core.domain_types import TimeRange
from devjournal.core.errors import InputValidationError, ResourceNotFoundError
from devjournal.models.entry import Entry
from devjournal.schemas.entry import EntryCreate, EntryUpdate
from devjournal.schemas.project import ProjectCreate
from devjournal.services.journal_service import JournalService


@pytest.fixture
def service(test_db):
    return JournalService(test_db)


async def _entry_count(db) -> int:
    return await db.scalar(select(func.count()).select_from(Entry))


async def test_create_then_get_returns_enriched_entry(service):
    project = await service.create_project("alice", ProjectCreate(name="App"))
    created = await service.create_entry("alice", EntryCreate.model_validate({
        "content": "Learned closures", "tags": ["js", "fp"], "projectIds": [project.id],
    }))
    fetched = await service.get_entry(created.id, "alice")
    assert fetched.owner_id == "alice"
    assert sorted(fetched.tags) == ["fp", "js"]
    assert [p.name for p in fetched.projects] == ["App"]


async def test_create_returns_bare_entry(service):
    created = await service.create_entry("alice", EntryCreate(content="x"))
    dumped = created.model_dump(by_alias=True)
    assert "tags" not in dumped
    assert dumped["userId"] == "alice"


async def test_get_foreign_entry_raises_not_found(service):
    created = await service.create_entry("bob", EntryCreate(content="theirs"))
    with pytest.raises(ResourceNotFoundError):
        await service.get_entry(created.id, "alice")


async def test_create_with_foreign_project_is_rejected(service, test_db):
    theirs = await service.create_project("bob", ProjectCreate(name="Theirs"))
    with pytest.raises(InputValidationError) as exc_info:
        await service.create_entry("alice", EntryCreate.model_validate({
            "content": "x", "projectIds": [theirs.id],
        }))
    assert exc_info.value.field == "projectIds"
    assert await _entry_count(test_db) == 0


async def test_create_with_unknown_project_is_rejected(service):
    with pytest.raises(InputValidationError):
        await service.create_entry("alice", EntryCreate.model_validate({
            "content": "x", "projectIds": [4242],
        }))


async def test_update_foreign_entry_raises_not_found(service):
    created = await service.create_entry("alice", EntryCreate(content="mine"))
    with pytest.raises(ResourceNotFoundError):
        await service.update_entry(
            created.id, "bob", EntryUpdate(content="hijacked"),
        )
    assert (await service.get_entry(created.id, "alice")).content == "mine"


async def test_update_checks_ownership_before_project_ids(service):
    with pytest.raises(ResourceNotFoundError):
        await service.update_entry(
            999, "alice", EntryUpdate.model_validate({"projectIds": [4242]}),
        )


async def test_update_tags_semantics(service):
    created = await service.create_entry(
        "alice", EntryCreate(content="x", tags=["js", "fp"]),
    )
    await service.update_entry(created.id, "alice", EntryUpdate(confidence=5))
    assert sorted((await service.get_entry(created.id, "alice")).tags) == ["fp", "js"]

    await service.update_entry(created.id, "alice", EntryUpdate(tags=[]))
    assert (await service.get_entry(created.id, "alice")).tags == []


async def test_delete_then_get_raises_not_found(service):
    created = await service.create_entry("alice", EntryCreate(content="x", tags=["js"]))
    await service.delete_entry(created.id, "alice")
    with pytest.raises(ResourceNotFoundError):
        await service.get_entry(created.id, "alice")


async def test_delete_missing_raises_not_found(service):
    with pytest.raises(ResourceNotFoundError):
        await service.delete_entry(999, "alice")


async def test_list_entries_scoped_to_owner(service):
    await service.create_entry("alice", EntryCreate(content="mine"))
    await service.create_entry("bob", EntryCreate(content="theirs"))
    listed = await service.list_entries("alice")
    assert [e.content for e in listed] == ["mine"]


async def test_projects_scoped_to_owner(service):
    mine = await service.create_project("alice", ProjectCreate(name="Mine"))
    theirs = await service.create_project("bob", ProjectCreate(name="Theirs"))
    assert [p.id for p in await service.list_projects("alice")] == [mine.id]
    assert (await service.get_project(mine.id, "alice")).name == "Mine"
    with pytest.raises(ResourceNotFoundError):
        await service.get_project(theirs.id, "alice")


async def test_list_tags_is_global(service):
    await service.create_entry("alice", EntryCreate(content="x", tags=["js"]))
    await service.create_entry("bob", EntryCreate(content="y", tags=["rust"]))
    names = sorted(t.name for t in await service.list_tags())
    assert names == ["js", "rust"]


async def test_entries_in_window(service):
    now = datetime.now(timezone.utc)
    await service.create_entry("alice", EntryCreate(content="today", date=now - timedelta(hours=2)))
    await service.create_entry("alice", EntryCreate(content="this week", date=now - timedelta(days=3)))
    await service.create_entry("alice", EntryCreate(content="last month", date=now - timedelta(days=30)))
    await service.create_entry("bob", EntryCreate(content="theirs", date=now))

    daily = await service.entries_in_window("alice", TimeRange.DAILY, now=now)
    weekly = await service.entries_in_window("alice", TimeRange.WEEKLY, now=now)
    assert [e.entry.content for e in daily] == ["today"]
    assert [e.entry.content for e in weekly] == ["today", "this week"]


async def test_update_loads_owned_row_once(service, monkeypatch):
    created = await service.create_entry("alice", EntryCreate(content="x"))
    calls = []
    original = service.entries.get_owned

    async def counting_get_owned(entry_id, owner_id):
        calls.append(entry_id)
        return await original(entry_id, owner_id)

    monkeypatch.setattr(service.entries, "get_owned", counting_get_owned)
    await service.update_entry(created.id, "alice", EntryUpdate(notes="n"))
    assert calls == [created.id]
