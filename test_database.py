import pytest
import pytest_asyncio

from database import SQLiteKeyValueStore
from exceptions import PersistenceError


@pytest_asyncio.fixture
async def kv_store(tmp_path):
    async with SQLiteKeyValueStore(str(tmp_path / "notes.db")) as store:
        yield store


async def test_missing_keys_read_empty(kv_store):
    assert await kv_store.get_string_list("notes") == []
    assert await kv_store.get_string("last_purge_date") is None


async def test_string_list_and_string_persist(kv_store):
    assert await kv_store.set_string_list("notes", ['{"id": "1"}', '{"id": "2"}'])
    assert await kv_store.set_string("last_purge_date", "2024-06-16T09:00:00")

    assert await kv_store.get_string_list("notes") == ['{"id": "1"}', '{"id": "2"}']
    assert await kv_store.get_string("last_purge_date") == "2024-06-16T09:00:00"

    await kv_store.set_string_list("notes", [])
    assert await kv_store.get_string_list("notes") == []


async def test_values_survive_reopen(tmp_path):
    path = str(tmp_path / "notes.db")
    async with SQLiteKeyValueStore(path) as store:
        await store.set_string("last_purge_date", "2024-06-16T09:00:00")

    async with SQLiteKeyValueStore(path) as store:
        assert await store.get_string("last_purge_date") == "2024-06-16T09:00:00"


async def test_use_before_open_raises(tmp_path):
    store = SQLiteKeyValueStore(str(tmp_path / "notes.db"))
    assert not store.is_open
    with pytest.raises(PersistenceError):
        await store.get_string("notes")


async def test_non_list_value_raises(kv_store):
    await kv_store.set_string("notes", "not a list")
    with pytest.raises(PersistenceError):
        await kv_store.get_string_list("notes")


async def test_open_failure_raises(tmp_path):
    store = SQLiteKeyValueStore(str(tmp_path / "missing-dir" / "notes.db"))
    with pytest.raises(PersistenceError):
        await store.open()
