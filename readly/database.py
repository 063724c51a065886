"""
Readly Backend: Database Client Management
============================================

What:  Owns the async MongoDB client and the three collection handles.
How:   A Database object wraps one pymongo AsyncMongoClient created at process
       start. The app factory stores it on `app.state`; route handlers receive
       it through the `get_database` dependency.
Who:   Created by main.py; used by every service.
When:  Client is created once per process and closed during shutdown.

Architecture Decision:
    The client is an explicitly owned object instead of module-level state.
    Tests pass a Database built on an in-memory client; production builds one
    from settings. pymongo's AsyncMongoClient keeps its own connection pool,
    so a single instance serves every concurrent request.

Collections:
    blogs      Blog documents, listed newest first
    comments   Comment documents, listed unordered
    wishlist   Wish documents, unique per (blogId, email)
"""

import logging
from typing import Any, Dict

from fastapi import Request
from pymongo import ASCENDING, AsyncMongoClient

from readly.config import Settings

logger = logging.getLogger(__name__)

BLOGS = "blogs"
COMMENTS = "comments"
WISHLIST = "wishlist"

WISH_PAIR_INDEX = "blogId_email_unique"


class Database:
    """
    Handle on the Readly database and its collections.

    Attributes:
        client:    The driver client (AsyncMongoClient in production)
        blogs:     Collection of Blog documents
        comments:  Collection of Comment documents
        wishlist:  Collection of Wish documents
    """

    def __init__(self, client: Any, name: str):
        self.client = client
        self.name = name
        self.db = client[name]
        self.blogs = self.db[BLOGS]
        self.comments = self.db[COMMENTS]
        self.wishlist = self.db[WISHLIST]

    @classmethod
    def from_settings(cls, settings: Settings) -> "Database":
        """
        Build a Database from application settings.

        AsyncMongoClient connects lazily: no network I/O happens here, the
        first store call (or ping) opens the pool.
        """
        client = AsyncMongoClient(settings.database_url, appname="readly")
        logger.info("MongoDB client created for database '%s'", settings.db_name)
        return cls(client, settings.db_name)

    async def ensure_indexes(self) -> None:
        """
        Create the indexes the API relies on.

        wishlist (blogId, email) unique:
            Turns the duplicate-wish check into a store-level constraint.
            A concurrent duplicate insert fails with DuplicateKeyError.
        wishlist email:
            Supports GET /wishlist?email= filtering.

        create_index is idempotent, so this runs on every startup.
        """
        await self.wishlist.create_index(
            [("blogId", ASCENDING), ("email", ASCENDING)],
            unique=True,
            name=WISH_PAIR_INDEX,
        )
        await self.wishlist.create_index([("email", ASCENDING)], name="email")
        logger.info("Wishlist indexes ensured")

    async def ping(self) -> Dict[str, Any]:
        """Round-trip to the server with the `ping` admin command."""
        return await self.client.admin.command("ping")

    async def close(self) -> None:
        """Close every pooled connection."""
        await self.client.close()
        logger.info("MongoDB client closed")


# ── Dependency ────────────────────────────────────────────────────────────
def get_database(request: Request) -> Database:
    """
    FastAPI dependency returning the Database owned by the running app.

    Example usage in a route:
        @router.get("/blogs")
        async def list_blogs(db: Database = Depends(get_database)):
            return await blog_service.list_blogs(db)
    """
    return request.app.state.database
