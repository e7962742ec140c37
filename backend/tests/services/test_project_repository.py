"""Project Repository — owner-scoped project CRUD."""

import pytest

from devjournal.services.project_repository import ProjectRepository


@pytest.fixture
def repo(test_db):
    return ProjectRepository(test_db)


async def test_create_attaches_owner(repo):
    project = await repo.create("alice", {"name": "App", "repo_url": "https://git.example/app"})
    assert project.id is not None
    assert project.owner_id == "alice"
    assert project.repo_url == "https://git.example/app"


async def test_list_by_owner_scoped_and_newest_first(repo):
    first = await repo.create("alice", {"name": "First"})
    second = await repo.create("alice", {"name": "Second"})
    await repo.create("bob", {"name": "Theirs"})
    listed = await repo.list_by_owner("alice")
    assert [p.id for p in listed] == [second.id, first.id]


async def test_get_owner_scoped(repo):
    project = await repo.create("bob", {"name": "Theirs"})
    assert await repo.get(project.id, owner_id="alice") is None
    assert (await repo.get(project.id)).name == "Theirs"


async def test_owned_ids_filters_foreign_and_missing(repo):
    mine = await repo.create("alice", {"name": "Mine"})
    theirs = await repo.create("bob", {"name": "Theirs"})
    assert await repo.owned_ids("alice", [mine.id, theirs.id, 999]) == {mine.id}
    assert await repo.owned_ids("alice", []) == set()
