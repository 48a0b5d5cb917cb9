"""
DualPost Backend — MongoDB Client Management
=============================================

What:  Motor client factory and collection accessor.
Why:   The document-store counterpart of database.py; keeps driver setup out
       of the store and out of module globals.
How:   The lifespan creates one AsyncIOMotorClient, resolves the posts
       collection from it, and closes the client at shutdown.

Motor manages its own connection pool internally; a single client instance
is meant to be shared by every request in the process.
"""

from motor.motor_asyncio import AsyncIOMotorClient, AsyncIOMotorCollection

from dualpost.config import Settings


def create_mongo_client(settings: Settings) -> AsyncIOMotorClient:
    """
    Create the Motor client.

    Motor connects lazily: constructing the client never blocks, and the first
    operation (or ping) is what actually reaches the server.
    """
    # tz_aware: createdAt/updatedAt come back as UTC-aware datetimes
    return AsyncIOMotorClient(settings.mongo_url, tz_aware=True)


def get_posts_collection(
    client: AsyncIOMotorClient, settings: Settings
) -> AsyncIOMotorCollection:
    """Resolve the single collection all posts live in."""
    return client[settings.mongo_database][settings.mongo_collection]


def close_mongo_client(client: AsyncIOMotorClient) -> None:
    """Close all pooled connections at shutdown."""
    client.close()
