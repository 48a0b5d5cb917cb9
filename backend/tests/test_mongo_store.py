"""
DualPost Backend — MongoDB Store Tests
=======================================

What:  Tests for MongoPostStore against a mongomock-motor collection.
Why:   Exercises the real Motor-style calls (insert_one, find().sort(),
       find_one_and_update, delete_one) without a MongoDB server.

What we test:
    ✅ Create assigns an ObjectId string and timestamps
    ✅ List is newest-first and empty when nothing exists
    ✅ Absence signalled with None/False for a valid but unknown ObjectId
    ✅ Update is a full replace and refreshes updatedAt
    ✅ Missing field (document schema) and malformed id raise StorageError
"""

import pytest
from bson import ObjectId
from unittest.mock import AsyncMock, MagicMock

from dualpost.exceptions import StorageError
from dualpost.schemas.post import PostInput
from dualpost.services.mongo_store import MongoPostStore


class TestMongoCreate:

    @pytest.mark.asyncio
    async def test_create_returns_object_id_and_timestamps(self, mongo_store):
        post = await mongo_store.create(PostInput(title="A", author="B", content="C"))

        assert isinstance(post.id, str)
        assert ObjectId.is_valid(post.id)
        assert (post.title, post.author, post.content) == ("A", "B", "C")
        assert post.created_at is not None
        assert post.updated_at is not None

    @pytest.mark.asyncio
    async def test_create_persists_document_shape(self, mongo_store, mongo_collection):
        post = await mongo_store.create(PostInput(title="A", author="B", content="C"))

        document = await mongo_collection.find_one({"_id": ObjectId(post.id)})

        assert set(document) == {"_id", "title", "author", "content", "createdAt", "updatedAt"}

    @pytest.mark.asyncio
    async def test_create_missing_field_raises_storage_error(self, mongo_store, mongo_collection):
        with pytest.raises(StorageError):
            await mongo_store.create(PostInput(title="A", content="C"))

        assert await mongo_collection.count_documents({}) == 0


class TestMongoList:

    @pytest.mark.asyncio
    async def test_list_empty(self, mongo_store):
        assert await mongo_store.list() == []

    @pytest.mark.asyncio
    async def test_list_newest_first(self, mongo_store):
        ids = []
        for i in range(3):
            post = await mongo_store.create(PostInput(title=f"t{i}", author="a", content="c"))
            ids.append(post.id)

        posts = await mongo_store.list()

        assert [p.id for p in posts] == list(reversed(ids))


class TestMongoGetUpdateDelete:

    @pytest.mark.asyncio
    async def test_get_round_trip(self, mongo_store):
        created = await mongo_store.create(PostInput(title="T", author="Au", content="Body"))

        fetched = await mongo_store.get(created.id)

        assert fetched.id == created.id
        assert (fetched.title, fetched.author, fetched.content) == ("T", "Au", "Body")

    @pytest.mark.asyncio
    async def test_get_missing_returns_none(self, mongo_store):
        assert await mongo_store.get(str(ObjectId())) is None

    @pytest.mark.asyncio
    async def test_update_replaces_all_fields(self, mongo_store):
        created = await mongo_store.create(PostInput(title="A", author="B", content="C"))

        updated = await mongo_store.update(
            created.id, PostInput(title="A2", author="B2", content="C2")
        )

        assert updated.id == created.id
        assert (updated.title, updated.author, updated.content) == ("A2", "B2", "C2")
        assert updated.updated_at >= updated.created_at
        fetched = await mongo_store.get(created.id)
        assert (fetched.title, fetched.author, fetched.content) == ("A2", "B2", "C2")

    @pytest.mark.asyncio
    async def test_update_missing_returns_none(self, mongo_store):
        result = await mongo_store.update(
            str(ObjectId()), PostInput(title="A", author="B", content="C")
        )
        assert result is None

    @pytest.mark.asyncio
    async def test_update_missing_with_partial_body_returns_none(self, mongo_store):
        result = await mongo_store.update(str(ObjectId()), PostInput(title="only"))
        assert result is None

    @pytest.mark.asyncio
    async def test_update_with_missing_field_raises_and_keeps_document(self, mongo_store):
        created = await mongo_store.create(PostInput(title="A", author="B", content="C"))

        with pytest.raises(StorageError):
            await mongo_store.update(created.id, PostInput(title="A2"))

        fetched = await mongo_store.get(created.id)
        assert (fetched.title, fetched.author, fetched.content) == ("A", "B", "C")

    @pytest.mark.asyncio
    async def test_delete_then_delete_again(self, mongo_store):
        created = await mongo_store.create(PostInput(title="A", author="B", content="C"))

        assert await mongo_store.delete(created.id) is True
        assert await mongo_store.get(created.id) is None
        assert await mongo_store.delete(created.id) is False

    @pytest.mark.asyncio
    @pytest.mark.parametrize("bad_id", ["abc", "12345", "zzzzzzzzzzzzzzzzzzzzzzzz"])
    async def test_malformed_id_raises_storage_error(self, mongo_store, bad_id):
        with pytest.raises(StorageError):
            await mongo_store.get(bad_id)
        with pytest.raises(StorageError):
            await mongo_store.update(bad_id, PostInput(title="A", author="B", content="C"))
        with pytest.raises(StorageError):
            await mongo_store.delete(bad_id)


class TestMongoFailures:
    """Driver failures are wrapped, never leaked."""

    @pytest.mark.asyncio
    async def test_get_wraps_driver_error(self):
        collection = MagicMock()
        collection.find_one = AsyncMock(side_effect=TimeoutError("server selection timeout"))
        store = MongoPostStore(collection)

        with pytest.raises(StorageError) as exc_info:
            await store.get(str(ObjectId()))

        assert exc_info.value.context["error_type"] == "TimeoutError"

    @pytest.mark.asyncio
    async def test_health_check_reachable(self):
        collection = MagicMock()
        collection.database.command = AsyncMock(return_value={"ok": 1.0})

        assert await MongoPostStore(collection).health_check() is True
        collection.database.command.assert_awaited_once_with("ping")

    @pytest.mark.asyncio
    async def test_health_check_unreachable(self):
        collection = MagicMock()
        collection.database.command = AsyncMock(side_effect=ConnectionError("refused"))

        assert await MongoPostStore(collection).health_check() is False
