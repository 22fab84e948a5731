"""Meta Store - verifies the registered-key meta API.

Invariants:
    - Only registered keys are read and written
    - None deletes a value; non-scalar values are rejected with no write
"""

import pytest

from navmenu.core.errors import MetadataUpdateError
from navmenu.models.post import Post
from navmenu.services.meta_store import SqlMetaStore, read_meta, write_meta


@pytest.fixture
async def item(test_db):
    post = Post(post_type="nav_menu_item", post_title="Home")
    test_db.add(post)
    await test_db.commit()
    return post


async def test_missing_registered_keys_read_as_empty(test_db, item):
    store = SqlMetaStore(test_db, ["_highlight"])
    assert await store.get_values(item.id) == {"_highlight": ""}


async def test_update_writes_registered_keys_only(test_db, item):
    store = SqlMetaStore(test_db, ["_highlight"])
    await store.update_values({"_highlight": "yes", "_secret": "no"}, item.id)
    stored = await read_meta(test_db, item.id)
    assert stored == {"_highlight": "yes"}


async def test_none_deletes_value(test_db, item):
    await write_meta(test_db, item.id, "_highlight", "yes")
    await test_db.commit()
    store = SqlMetaStore(test_db, ["_highlight"])
    await store.update_values({"_highlight": None}, item.id)
    assert await read_meta(test_db, item.id) == {}


async def test_non_scalar_value_is_rejected(test_db, item):
    store = SqlMetaStore(test_db, ["_highlight"])
    with pytest.raises(MetadataUpdateError) as exc:
        await store.update_values({"_highlight": {"nested": True}}, item.id)
    assert exc.value.http_status == 400
    assert exc.value.key == "_highlight"
    assert await read_meta(test_db, item.id) == {}


async def test_write_meta_replaces_existing(test_db, item):
    await write_meta(test_db, item.id, "_menu_item_url", "a")
    await write_meta(test_db, item.id, "_menu_item_url", "b")
    await test_db.commit()
    assert await read_meta(test_db, item.id) == {"_menu_item_url": "b"}
