"""Repository tests against a real SQLite store.

Covers constraint translation, store-level cascades and ordering.
"""

from datetime import datetime

import pytest
from sqlalchemy import func, select

from app.core.exceptions import ConflictError, InvalidStateError, NotFoundError
from app.models.category import Category
from app.models.subtask import Subtask
from app.models.tag import Tag
from app.models.task import Task, TaskCategory, TaskTag
from app.repositories.CategoryRepository import CategoryRepository
from app.repositories.SubtaskRepository import SubtaskRepository
from app.repositories.TagRepository import TagRepository
from app.repositories.TaskRepository import TaskRepository
from app.repositories.UserRepository import UserRepository


async def _count(session, model) -> int:
    result = await session.execute(select(func.count()).select_from(model))
    return result.scalar_one()


@pytest.mark.asyncio
async def test_duplicate_category_insert_maps_to_conflict(session, users):
    alice, _ = users
    repo = CategoryRepository(session)
    await repo.create(Category(name="Work", user_id=alice))
    await session.commit()

    with pytest.raises(ConflictError):
        await repo.create(Category(name="Work", user_id=alice))

    # the session was rolled back and is still usable
    assert await repo.name_exists("Work", alice)


@pytest.mark.asyncio
async def test_missing_owner_maps_to_not_found(session, users):
    with pytest.raises(NotFoundError):
        await TagRepository(session).create(Tag(name="urgent", user_id="no-such-user"))


@pytest.mark.asyncio
async def test_duplicate_email_insert_maps_to_conflict(session, users):
    from app.models.user import User

    with pytest.raises(ConflictError):
        await UserRepository(session).create(
            User(username="other", email="  ALICE@example.com ", password_hash="x")
        )


@pytest.mark.asyncio
async def test_get_by_email_is_case_insensitive(session, users):
    alice, _ = users
    user = await UserRepository(session).get_by_email("Alice@Example.COM")
    assert user is not None
    assert user.user_id == alice


@pytest.mark.asyncio
async def test_delete_missing_row_returns_false(session, users):
    assert await TaskRepository(session).delete("missing") is False


@pytest.mark.asyncio
async def test_update_missing_row_returns_none(session, users):
    alice, _ = users
    ghost = Tag(tag_id="ghost", name="ghost", user_id=alice)
    assert await TagRepository(session).update(ghost) is None


@pytest.mark.asyncio
async def test_deleting_task_cascades_to_subtasks_and_links(session, users):
    alice, _ = users
    tasks = TaskRepository(session)
    task = await tasks.create(Task(title="Ship", user_id=alice))
    category = await CategoryRepository(session).create(Category(name="Work", user_id=alice))
    tag = await TagRepository(session).create(Tag(name="urgent", user_id=alice))
    await SubtaskRepository(session).create(Subtask(title="Write notes", task_id=task.task_id))
    await tasks.add_category(task.task_id, category.category_id)
    await tasks.add_tag(task.task_id, tag.tag_id)

    assert await tasks.delete(task.task_id) is True

    assert await _count(session, Subtask) == 0
    assert await _count(session, TaskCategory) == 0
    assert await _count(session, TaskTag) == 0
    assert await _count(session, Category) == 1
    assert await _count(session, Tag) == 1


@pytest.mark.asyncio
async def test_deleting_tag_keeps_the_task(session, users):
    alice, _ = users
    tasks = TaskRepository(session)
    task = await tasks.create(Task(title="Ship", user_id=alice))
    tag = await TagRepository(session).create(Tag(name="urgent", user_id=alice))
    await tasks.add_tag(task.task_id, tag.tag_id)

    assert await TagRepository(session).delete(tag.tag_id) is True

    assert await _count(session, TaskTag) == 0
    reloaded = await tasks.get_with_details(task.task_id)
    assert reloaded is not None
    assert reloaded.tags == []


@pytest.mark.asyncio
async def test_link_guards(session, users):
    alice, _ = users
    tasks = TaskRepository(session)
    task = await tasks.create(Task(title="Ship", user_id=alice))
    category = await CategoryRepository(session).create(Category(name="Work", user_id=alice))

    await tasks.add_category(task.task_id, category.category_id)
    assert await tasks.has_category(task.task_id, category.category_id)
    with pytest.raises(ConflictError):
        await tasks.add_category(task.task_id, category.category_id)

    await tasks.remove_category(task.task_id, category.category_id)
    with pytest.raises(InvalidStateError):
        await tasks.remove_category(task.task_id, category.category_id)


@pytest.mark.asyncio
async def test_title_exists_ignores_case(session, users):
    alice, bob = users
    tasks = TaskRepository(session)
    await tasks.create(Task(title="Ship", user_id=alice))

    assert await tasks.title_exists("  SHIP ", alice)
    assert not await tasks.title_exists("Ship", bob)


@pytest.mark.asyncio
async def test_categories_by_task_are_scoped_to_owner(session, users):
    alice, bob = users
    tasks = TaskRepository(session)
    categories = CategoryRepository(session)
    task = await tasks.create(Task(title="Ship", user_id=alice))
    for name in ("Zeta", "Alpha"):
        category = await categories.create(Category(name=name, user_id=alice))
        await tasks.add_category(task.task_id, category.category_id)

    names = [c.name for c in await categories.get_by_task(task.task_id, alice)]
    assert names == ["Alpha", "Zeta"]
    assert await categories.get_by_task(task.task_id, bob) == []


@pytest.mark.asyncio
async def test_task_count(session, users):
    alice, bob = users
    tasks = TaskRepository(session)
    await tasks.create(Task(title="One", user_id=alice))
    await tasks.create(Task(title="Two", user_id=alice))

    users_repo = UserRepository(session)
    assert await users_repo.get_task_count(alice) == 2
    assert await users_repo.get_task_count(bob) == 0


@pytest.mark.asyncio
async def test_case_variant_title_insert_maps_to_conflict(session, users):
    alice, bob = users
    tasks = TaskRepository(session)
    await tasks.create(Task(title="Ship", user_id=alice))
    await session.commit()

    # skips the service pre-check, as a racing request would
    with pytest.raises(ConflictError):
        await tasks.create(Task(title="ship", user_id=alice))

    assert (await tasks.create(Task(title="ship", user_id=bob))).user_id == bob


@pytest.mark.asyncio
async def test_deleting_category_keeps_the_task(session, users):
    alice, _ = users
    tasks = TaskRepository(session)
    task = await tasks.create(Task(title="Ship", user_id=alice))
    category = await CategoryRepository(session).create(Category(name="Work", user_id=alice))
    await tasks.add_category(task.task_id, category.category_id)

    assert await CategoryRepository(session).delete(category.category_id) is True

    assert await _count(session, TaskCategory) == 0
    reloaded = await tasks.get_with_details(task.task_id)
    assert reloaded is not None
    assert reloaded.categories == []


@pytest.mark.asyncio
async def test_get_by_user_newest_first(session, users):
    alice, bob = users
    tasks = TaskRepository(session)
    await tasks.create(Task(title="Old", user_id=alice, created_at=datetime(2030, 1, 1)))
    await tasks.create(Task(title="New", user_id=alice, created_at=datetime(2030, 1, 2)))

    assert [t.title for t in await tasks.get_by_user(alice)] == ["New", "Old"]
    assert await tasks.get_by_user(bob) == []

    detailed = await tasks.get_by_user(alice, details=True)
    assert [t.title for t in detailed] == ["New", "Old"]
    assert all(t.subtasks == [] and t.tags == [] and t.categories == [] for t in detailed)


@pytest.mark.asyncio
async def test_user_exists(session, users):
    alice, _ = users
    repo = UserRepository(session)

    assert await repo.exists(alice)
    assert not await repo.exists("no-such-user")
