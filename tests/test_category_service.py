"""CategoryService and TagService behaviour against a real store."""

import pytest

from app.core.exceptions import ConflictError, InvalidArgumentError
from app.repositories.CategoryRepository import CategoryRepository
from app.repositories.TagRepository import TagRepository
from app.services.CategoryService import CategoryService
from app.services.TagService import TagService


@pytest.fixture()
def categories(session):
    return CategoryService(CategoryRepository(session))


@pytest.fixture()
def tags(session):
    return TagService(TagRepository(session))


# ---------------------------------------------------------------------------
# Categories
# ---------------------------------------------------------------------------


@pytest.mark.asyncio
async def test_create_category_normalizes_color_and_rejects_duplicates(categories, users):
    alice, bob = users

    work = await categories.create_category("Work", "#ff0000", alice)
    assert work.color == "#FF0000"
    assert work.name == "Work"

    with pytest.raises(ConflictError):
        await categories.create_category("Work", None, alice)

    other = await categories.create_category("Work", None, bob)
    assert other.user_id == bob
    assert other.color == "#FFFFFF"


@pytest.mark.asyncio
async def test_create_category_trims_name(categories, users):
    alice, _ = users
    category = await categories.create_category("  Home  ", "bogus", alice)
    assert category.name == "Home"
    assert category.color == "#FFFFFF"


@pytest.mark.asyncio
@pytest.mark.parametrize("name", ["", "   ", None])
async def test_create_category_requires_name(categories, users, name):
    alice, _ = users
    with pytest.raises(InvalidArgumentError):
        await categories.create_category(name, None, alice)


@pytest.mark.asyncio
async def test_update_category_blank_fields_are_ignored(categories, users):
    alice, _ = users
    category = await categories.create_category("Work", "#123456", alice)

    updated = await categories.update_category(category.category_id, alice, name="  ", color="")

    assert updated.name == "Work"
    assert updated.color == "#123456"


@pytest.mark.asyncio
async def test_update_category_changes_name_and_color(categories, users):
    alice, _ = users
    category = await categories.create_category("Work", None, alice)

    updated = await categories.update_category(category.category_id, alice, name="Office", color="#0f0")

    assert updated.name == "Office"
    assert updated.color == "#0F0"


@pytest.mark.asyncio
async def test_update_category_rejects_taken_name(categories, users):
    alice, _ = users
    await categories.create_category("Work", None, alice)
    home = await categories.create_category("Home", None, alice)

    with pytest.raises(ConflictError):
        await categories.update_category(home.category_id, alice, name="Work")


@pytest.mark.asyncio
async def test_category_ownership_isolation(categories, users):
    alice, bob = users
    category = await categories.create_category("Work", None, alice)

    assert await categories.get_category_by_id(category.category_id, bob) is None
    assert await categories.update_category(category.category_id, bob, name="Stolen") is None
    assert await categories.delete_category(category.category_id, bob) is False
    assert await categories.get_user_categories(bob) == []

    assert (await categories.get_category_by_id(category.category_id, alice)).name == "Work"


@pytest.mark.asyncio
async def test_delete_category(categories, users):
    alice, _ = users
    category = await categories.create_category("Work", None, alice)

    assert await categories.delete_category(category.category_id, alice) is True
    assert await categories.get_category_by_id(category.category_id, alice) is None
    assert await categories.delete_category(category.category_id, alice) is False


# ---------------------------------------------------------------------------
# Tags
# ---------------------------------------------------------------------------


@pytest.mark.asyncio
async def test_tag_uniqueness_is_per_user(tags, users):
    alice, bob = users
    await tags.create_tag("urgent", alice)

    with pytest.raises(ConflictError):
        await tags.create_tag(" urgent ", alice)

    assert (await tags.create_tag("urgent", bob)).user_id == bob


@pytest.mark.asyncio
async def test_rename_tag(tags, users):
    alice, _ = users
    tag = await tags.create_tag("urgent", alice)

    renamed = await tags.update_tag(tag.tag_id, alice, name="later")
    assert renamed.name == "later"

    unchanged = await tags.update_tag(tag.tag_id, alice, name=None)
    assert unchanged.name == "later"


@pytest.mark.asyncio
async def test_tag_ownership_isolation(tags, users):
    alice, bob = users
    tag = await tags.create_tag("urgent", alice)

    assert await tags.get_tag_by_id(tag.tag_id, bob) is None
    assert await tags.update_tag(tag.tag_id, bob, name="mine") is None
    assert await tags.delete_tag(tag.tag_id, bob) is False
    assert [t.name for t in await tags.get_user_tags(alice)] == ["urgent"]
