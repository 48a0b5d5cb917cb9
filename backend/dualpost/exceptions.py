"""
DualPost Backend — Custom Exception Hierarchy
==============================================

What:  Defines application-specific exceptions for the two caller-visible
       failure kinds.
Why:   Stores translate driver-specific failures (asyncpg, SQLAlchemy, PyMongo,
       bson) into one of these types, so the router and the global handlers
       never import a driver.
How:   Each exception carries a message and an optional context dict.
       Global exception handlers (registered in main.py) catch these and
       return the fixed JSON error bodies.

Exception Hierarchy:
    DualPostError (base)
    ├── PostNotFoundError  → 404 Not Found
    └── StorageError       → 500 Internal Server Error

There is deliberately no validation-error type: a post missing a required
field is rejected by the store itself and surfaces as StorageError.
"""

from typing import Any, Dict, Optional


class DualPostError(Exception):
    """
    Base exception for all DualPost application errors.

    Attributes:
        message:  Human-readable error description
        context:  Additional debug info (logged but NOT returned to client)
    """

    def __init__(
        self,
        message: str = "An unexpected error occurred",
        context: Optional[Dict[str, Any]] = None,
    ):
        self.message = message
        self.context = context or {}
        super().__init__(self.message)


class PostNotFoundError(DualPostError):
    """
    Raised when no post matches the requested identifier.

    What:    GET/PUT/DELETE /api/posts/{backend}/{id} with a well-formed id
             that has no matching record.
    HTTP:    404 Not Found, body {"error": "Post not found"}

    Stores signal absence with None/False; the router converts that into this
    exception so HTTP concerns stay out of the stores.
    """

    def __init__(
        self,
        backend: str,
        post_id: str,
        context: Optional[Dict[str, Any]] = None,
    ):
        ctx = context or {}
        ctx["backend"] = backend
        ctx["post_id"] = post_id
        super().__init__(
            message=f"Post with ID '{post_id}' was not found in {backend}",
            context=ctx,
        )
        self.backend = backend
        self.post_id = post_id


class StorageError(DualPostError):
    """
    Raised when a storage operation fails for any reason other than absence.

    What:    Connectivity loss, malformed identifier, NOT NULL violation,
             document schema violation, driver errors.
    HTTP:    500 Internal Server Error, body {"error": "Internal Server Error"}

    Security Note:
        The message returned to the client is always the fixed generic one.
        The driver's diagnostic lives in `context` and is logged server-side only.
    """

    def __init__(
        self,
        message: str = "A storage error occurred",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)
