"""
DualPost Backend — MongoDB Post Store
======================================

What:  PostStore implementation over the `posts` collection.
Why:   Backs the /api/posts/mongo surface.
How:   One Motor collection operation per call against the injected collection.

Operation map:
    create  → insert_one(PostDocument)
    list    → find().sort(createdAt desc, _id desc)
    get     → find_one({_id})
    update  → find_one_and_update({_id}, $set, return_document=AFTER)
    delete  → delete_one({_id})

Absence is a None document (or deleted_count == 0). A document missing a
required field fails PostDocument validation, and a string that is not a
valid ObjectId fails bson parsing; both surface as StorageError. An update
whose body fails validation is still None when the id is unknown.
"""

import logging
from typing import Any, Dict, List, Optional

from bson import ObjectId
from bson.errors import InvalidId
from motor.motor_asyncio import AsyncIOMotorCollection
from pydantic import ValidationError
from pymongo import DESCENDING, ReturnDocument

from dualpost.exceptions import StorageError
from dualpost.schemas.post import PostDocument, PostInput, PostResponse
from dualpost.services.store_base import PostStore

logger = logging.getLogger(__name__)

# createdAt alone can tie at millisecond resolution; ObjectIds grow monotonically
NEWEST_FIRST = [("createdAt", DESCENDING), ("_id", DESCENDING)]


class MongoPostStore(PostStore):
    """
    Document adapter.

    Holds a single collection handle. The owning Motor client is created
    and closed by the lifespan, not by the store.
    """

    backend = "mongo"

    def __init__(self, collection: AsyncIOMotorCollection):
        self._collection = collection

    async def create(self, data: PostInput) -> PostResponse:
        try:
            document = PostDocument(
                title=data.title,
                author=data.author,
                content=data.content,
            ).model_dump(by_alias=True)
            result = await self._collection.insert_one(document)
        except Exception as e:
            logger.error("Error creating post in mongo: %s", str(e))
            raise StorageError(
                message="Could not create the post",
                context={"backend": self.backend, "error_type": type(e).__name__},
            )

        document["_id"] = result.inserted_id
        logger.info("Created post %s in mongo", result.inserted_id)
        return self._to_response(document)

    async def list(self) -> List[PostResponse]:
        try:
            cursor = self._collection.find().sort(NEWEST_FIRST)
            documents = await cursor.to_list(length=None)
        except Exception as e:
            logger.error("Error listing posts from mongo: %s", str(e))
            raise StorageError(
                message="Could not list posts",
                context={"backend": self.backend, "error_type": type(e).__name__},
            )

        logger.info("Listed %d posts from mongo", len(documents))
        return [self._to_response(document) for document in documents]

    async def get(self, post_id: str) -> Optional[PostResponse]:
        oid = self._parse_id(post_id)
        try:
            document = await self._collection.find_one({"_id": oid})
        except Exception as e:
            logger.error("Error retrieving post %s from mongo: %s", post_id, str(e))
            raise StorageError(
                message="Could not retrieve the post",
                context={"backend": self.backend, "post_id": post_id, "error_type": type(e).__name__},
            )

        if document is None:
            logger.info("Post %s not found in mongo", post_id)
            return None
        return self._to_response(document)

    async def update(self, post_id: str, data: PostInput) -> Optional[PostResponse]:
        oid = self._parse_id(post_id)
        try:
            replacement = PostDocument(
                title=data.title,
                author=data.author,
                content=data.content,
            )
        except ValidationError as e:
            # An unknown id is still NotFound, whatever the body holds
            if not await self._exists(oid, post_id):
                logger.info("Post %s not found in mongo for update", post_id)
                return None
            logger.error("Invalid replacement for post %s in mongo: %s", post_id, str(e))
            raise StorageError(
                message="Could not update the post",
                context={"backend": self.backend, "post_id": post_id, "error_type": type(e).__name__},
            )

        try:
            document = await self._collection.find_one_and_update(
                {"_id": oid},
                {
                    "$set": {
                        "title": replacement.title,
                        "author": replacement.author,
                        "content": replacement.content,
                        "updatedAt": replacement.updated_at,
                    }
                },
                return_document=ReturnDocument.AFTER,
            )
        except Exception as e:
            logger.error("Error updating post %s in mongo: %s", post_id, str(e))
            raise StorageError(
                message="Could not update the post",
                context={"backend": self.backend, "post_id": post_id, "error_type": type(e).__name__},
            )

        if document is None:
            logger.info("Post %s not found in mongo for update", post_id)
            return None
        logger.info("Updated post %s in mongo", post_id)
        return self._to_response(document)

    async def delete(self, post_id: str) -> bool:
        oid = self._parse_id(post_id)
        try:
            result = await self._collection.delete_one({"_id": oid})
        except Exception as e:
            logger.error("Error deleting post %s from mongo: %s", post_id, str(e))
            raise StorageError(
                message="Could not delete the post",
                context={"backend": self.backend, "post_id": post_id, "error_type": type(e).__name__},
            )

        if result.deleted_count == 0:
            logger.info("Post %s not found in mongo for deletion", post_id)
            return False
        logger.info("Deleted post %s from mongo", post_id)
        return True

    async def health_check(self) -> bool:
        try:
            await self._collection.database.command("ping")
            return True
        except Exception as e:
            logger.warning("MongoDB unreachable: %s", str(e))
            return False

    # ── Helpers ───────────────────────────────────────────────────────────

    def _parse_id(self, post_id: str) -> ObjectId:
        """Convert the path segment into an ObjectId (24 hex characters)."""
        try:
            return ObjectId(post_id)
        except (InvalidId, TypeError):
            logger.error("Malformed mongo post id: %r", post_id)
            raise StorageError(
                message="Malformed post identifier",
                context={"backend": self.backend, "post_id": post_id},
            )

    async def _exists(self, oid: ObjectId, post_id: str) -> bool:
        try:
            return await self._collection.find_one({"_id": oid}, {"_id": 1}) is not None
        except Exception as e:
            logger.error("Error looking up post %s in mongo: %s", post_id, str(e))
            raise StorageError(
                message="Could not update the post",
                context={"backend": self.backend, "post_id": post_id, "error_type": type(e).__name__},
            )

    @staticmethod
    def _to_response(document: Dict[str, Any]) -> PostResponse:
        return PostResponse(
            id=str(document["_id"]),
            title=document["title"],
            author=document["author"],
            content=document["content"],
            created_at=document.get("createdAt"),
            updated_at=document.get("updatedAt"),
        )
