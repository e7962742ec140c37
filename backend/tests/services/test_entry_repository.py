"""Entry Repository — owner-scoped CRUD with enrichment.

Invariants:
    - get(e.id).tags equals the deduplicated tag names given at create
    - list_by_owner never returns another owner's entries, and is date descending
    - update by a non-owner touches nothing and returns None
    - update with tag_names=[] clears tags; omitted tag_names leaves them
    - delete leaves zero join rows and get() returns None afterwards
"""

from datetime import datetime, timedelta, timezone

import pytest
from sqlalchemy import func, select

from devjournal.models.entry_project import EntryProject
from devjournal.models.entry_tag import EntryTag
from devjournal.models.project import Project
from devjournal.models.tag import Tag
from devjournal.services.entry_repository import EntryRepository


@pytest.fixture
def repo(test_db):
    return EntryRepository(test_db)


@pytest.fixture
async def project(test_db):
    project = Project(owner_id="alice", name="App")
    test_db.add(project)
    await test_db.flush()
    return project


async def _join_rows(db, model, entry_id) -> int:
    return await db.scalar(
        select(func.count()).select_from(model).where(model.entry_id == entry_id),
    )


async def test_create_attaches_owner_and_defaults(repo):
    entry = await repo.create("alice", {"content": "Learned closures"})
    assert entry.id is not None
    assert entry.owner_id == "alice"
    assert entry.time_spent == 0
    assert entry.confidence == 3
    assert entry.created_at is not None
    assert entry.date is not None


async def test_create_links_tags_deduplicated(repo):
    entry = await repo.create(
        "alice", {"content": "x"}, tag_names=["js", "fp", "js"],
    )
    enriched = await repo.get(entry.id)
    assert sorted(enriched.tags) == ["fp", "js"]


async def test_create_links_projects_with_full_records(repo, project):
    entry = await repo.create("alice", {"content": "x"}, project_ids=[project.id])
    enriched = await repo.get(entry.id)
    assert [p.id for p in enriched.projects] == [project.id]
    assert enriched.projects[0].name == "App"


async def test_second_entry_reuses_tag_rows(repo, test_db):
    await repo.create("alice", {"content": "Learned closures"}, tag_names=["js", "fp"])
    await repo.create("alice", {"content": "Learned promises"}, tag_names=["js"])
    names = (await test_db.execute(select(Tag.name))).scalars().all()
    assert sorted(names) == ["fp", "js"]


async def test_list_by_owner_excludes_other_owners(repo):
    await repo.create("alice", {"content": "mine"})
    await repo.create("bob", {"content": "theirs"})
    listed = await repo.list_by_owner("alice")
    assert [e.entry.content for e in listed] == ["mine"]


async def test_list_by_owner_is_date_descending(repo):
    now = datetime.now(timezone.utc)
    await repo.create("alice", {"content": "old", "date": now - timedelta(days=2)})
    await repo.create("alice", {"content": "new", "date": now})
    await repo.create("alice", {"content": "mid", "date": now - timedelta(days=1)})
    listed = await repo.list_by_owner("alice")
    assert [e.entry.content for e in listed] == ["new", "mid", "old"]


async def test_get_with_owner_hides_foreign_entry(repo):
    entry = await repo.create("bob", {"content": "theirs"})
    assert await repo.get(entry.id, owner_id="alice") is None
    assert (await repo.get(entry.id, owner_id="bob")).entry.id == entry.id


async def test_get_missing_returns_none(repo):
    assert await repo.get(12345) is None


async def test_update_changes_only_given_fields(repo):
    entry = await repo.create("alice", {"content": "x", "confidence": 2, "notes": "n"})
    updated = await repo.update(entry.id, "alice", {"confidence": 4})
    assert updated.confidence == 4
    assert updated.content == "x"
    assert updated.notes == "n"


async def test_update_by_non_owner_affects_nothing(repo):
    entry = await repo.create("alice", {"content": "x"}, tag_names=["js"])
    assert await repo.update(entry.id, "bob", {"content": "hijacked"}, tag_names=[]) is None
    enriched = await repo.get(entry.id)
    assert enriched.entry.content == "x"
    assert enriched.tags == ["js"]


async def test_update_with_empty_tags_clears_but_omitted_keeps(repo):
    kept = await repo.create("alice", {"content": "kept"}, tag_names=["js", "fp"])
    cleared = await repo.create("alice", {"content": "cleared"}, tag_names=["js", "fp"])

    await repo.update(kept.id, "alice", {})
    await repo.update(cleared.id, "alice", {}, tag_names=[])

    assert sorted((await repo.get(kept.id)).tags) == ["fp", "js"]
    assert (await repo.get(cleared.id)).tags == []


async def test_update_with_empty_project_ids_unlinks_projects(repo, project):
    entry = await repo.create("alice", {"content": "x"}, project_ids=[project.id])
    await repo.update(entry.id, "alice", {}, project_ids=[])
    assert (await repo.get(entry.id)).projects == []


async def test_update_replaces_tag_set(repo):
    entry = await repo.create("alice", {"content": "x"}, tag_names=["js", "fp"])
    await repo.update(entry.id, "alice", {}, tag_names=["rust", "js"])
    assert sorted((await repo.get(entry.id)).tags) == ["js", "rust"]


async def test_delete_removes_entry_and_join_rows(repo, project, test_db):
    entry = await repo.create(
        "alice", {"content": "x"}, tag_names=["js"], project_ids=[project.id],
    )
    assert await repo.delete(entry.id, "alice") is True
    assert await repo.get(entry.id) is None
    assert await _join_rows(test_db, EntryTag, entry.id) == 0
    assert await _join_rows(test_db, EntryProject, entry.id) == 0


async def test_delete_by_non_owner_is_noop(repo, test_db):
    entry = await repo.create("alice", {"content": "x"}, tag_names=["js"])
    assert await repo.delete(entry.id, "bob") is False
    assert await repo.get(entry.id) is not None
    assert await _join_rows(test_db, EntryTag, entry.id) == 1


async def test_delete_missing_is_noop(repo):
    assert await repo.delete(999, "alice") is False


async def test_deleting_entry_keeps_orphan_tags(repo, test_db):
    entry = await repo.create("alice", {"content": "x"}, tag_names=["lonely"])
    await repo.delete(entry.id, "alice")
    names = (await test_db.execute(select(Tag.name))).scalars().all()
    assert names == ["lonely"]


async def test_list_by_owner_since_filters_in_query(repo):
    now = datetime.now(timezone.utc)
    await repo.create("alice", {"content": "old", "date": now - timedelta(days=10)})
    await repo.create("alice", {"content": "recent", "date": now - timedelta(hours=1)})
    await repo.create("bob", {"content": "theirs", "date": now})
    listed = await repo.list_by_owner("alice", since=now - timedelta(days=1))
    assert [e.entry.content for e in listed] == ["recent"]


async def test_apply_update_on_loaded_row(repo):
    entry = await repo.create("alice", {"content": "x"}, tag_names=["js"])
    loaded = await repo.get_owned(entry.id, "alice")
    updated = await repo.apply_update(loaded, {"notes": "n"}, tag_names=["fp"])
    assert updated.notes == "n"
    assert (await repo.get(entry.id)).tags == ["fp"]
