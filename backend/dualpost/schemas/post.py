"""
DualPost Backend — Pydantic Request/Response Schemas
=====================================================

What:  Pydantic models defining the API contract and the stored document shape.
Why:   Typed input per operation, one serialized shape for both backends, and
       OpenAPI docs generated from the same definitions.
How:   FastAPI parses request bodies into PostInput and serializes PostResponse
       (by alias, dropping unset timestamps). MongoPostStore validates every
       document it writes against PostDocument.

Design Decision:
    PostInput is permissive: all three fields are optional, and a missing field
    is passed to the store as None. The store is the only place a post without
    a title/author/content gets rejected, and that rejection is a 500, not a
    400. PostDocument is the strict counterpart used inside the document store.
"""

import json
from datetime import datetime, timezone
from typing import Any, Optional, Union

from pydantic import BaseModel, Field, field_validator


def utcnow() -> datetime:
    """Current UTC time at BSON datetime precision (milliseconds)."""
    now = datetime.now(timezone.utc)
    return now.replace(microsecond=now.microsecond // 1000 * 1000)


# ══════════════════════════════════════════════════════════════════════════
# Request Models — What the client sends
# ══════════════════════════════════════════════════════════════════════════


class PostInput(BaseModel):
    """
    What:  Body of POST /api/posts/{backend} and PUT /api/posts/{backend}/{id}.
    Why:   An explicit shape for write operations instead of a raw dict.

    Update is a full replace: whatever this model holds is written, including
    None for an omitted field. Numbers, booleans, arrays and objects are kept
    as their JSON text, so no field type is ever rejected here.
    """
    title: Optional[str] = Field(default=None, description="Post title")
    author: Optional[str] = Field(default=None, description="Post author")
    content: Optional[str] = Field(default=None, description="Post body")

    @field_validator("title", "author", "content", mode="before")
    @classmethod
    def coerce_to_text(cls, v: Any) -> Any:
        """Store non-string JSON values as their JSON text, the way a TEXT column would."""
        if v is None or isinstance(v, str):
            return v
        return json.dumps(v)


# ══════════════════════════════════════════════════════════════════════════
# Storage Models — What the document store persists
# ══════════════════════════════════════════════════════════════════════════


class PostDocument(BaseModel):
    """
    What:  Schema of a document in the `posts` collection.
    Who:   Built by MongoPostStore before every insert and update.

    MongoDB itself enforces nothing, so this model is the document store's
    equivalent of the relational NOT NULL constraints.
    """
    title: str
    author: str
    content: str
    created_at: datetime = Field(default_factory=utcnow, alias="createdAt")
    updated_at: datetime = Field(default_factory=utcnow, alias="updatedAt")

    model_config = {"populate_by_name": True}


# ══════════════════════════════════════════════════════════════════════════
# Response Models — What the API returns to clients
# ══════════════════════════════════════════════════════════════════════════


class PostResponse(BaseModel):
    """
    What:  A stored post as returned by every endpoint.

    Fields:
        - id: integer for the relational store, ObjectId hex string for the
          document store
        - createdAt / updatedAt: only present for the document store; routes
          serialize with exclude_none so the relational shape omits them
    """
    id: Union[int, str] = Field(description="Identifier generated by the storage engine")
    title: str = Field(description="Post title")
    author: str = Field(description="Post author")
    content: str = Field(description="Post body")
    created_at: Optional[datetime] = Field(
        default=None,
        alias="createdAt",
        description="Creation time (document store only)",
    )
    updated_at: Optional[datetime] = Field(
        default=None,
        alias="updatedAt",
        description="Last update time (document store only)",
    )

    model_config = {"from_attributes": True, "populate_by_name": True}


# ══════════════════════════════════════════════════════════════════════════
# Error / Health Response Models
# ══════════════════════════════════════════════════════════════════════════


class ErrorResponse(BaseModel):
    """
    What:  Error body for 404 and 500 responses.

    Example:
        {"error": "Post not found"}
    """
    error: str = Field(description="Fixed, non-specific error message")


class HealthResponse(BaseModel):
    """Health check response showing service and store status."""
    status: str = Field(description="Overall service status: healthy, degraded, unhealthy")
    version: str = Field(description="Application version")
    postgres: str = Field(description="PostgreSQL connectivity: connected, disconnected")
    mongo: str = Field(description="MongoDB connectivity: connected, disconnected")
    uptime_seconds: float = Field(description="Seconds since service started")
