"""
Readly Backend: Blog Service
=============================

What:  Query shapes for the `blogs` collection.
How:   Each method performs exactly one store call on the Database it is
       given and converts the result into JSON-safe documents or an
       acknowledgment model.
Who:   Called by the /blogs and /featured-blogs route handlers.

Ordering:
    ObjectIds start with their creation timestamp and carry a per-process
    counter, so sorting on `_id` descending lists the newest blogs first.
    "Featured" blogs are the first FEATURED_BLOGS_LIMIT entries of that same
    ordering; there is no editorial flag or engagement metric.
"""

import logging
from typing import Any, Dict, List, Optional

from pymongo import DESCENDING
from pymongo.errors import PyMongoError

from readly.database import Database
from readly.exceptions import DatabaseError
from readly.schemas.resources import InsertAck
from readly.services.documents import serialize_document, serialize_documents, to_object_id

logger = logging.getLogger(__name__)

FEATURED_BLOGS_LIMIT = 6


class BlogService:
    """
    Business logic for blog operations.

    Responsibilities:
        - list_blogs(): every blog, newest first
        - create_blog(): verbatim insert
        - get_blog(): lookup by identifier, None when absent
        - list_featured_blogs(): the FEATURED_BLOGS_LIMIT newest blogs

    Driver errors are wrapped in DatabaseError (→ 500); nothing is retried.
    """

    async def list_blogs(self, db: Database) -> List[Dict[str, Any]]:
        """All blogs ordered by `_id` descending."""
        try:
            cursor = db.blogs.find({}).sort("_id", DESCENDING)
            blogs = await cursor.to_list(length=None)
        except PyMongoError as e:
            logger.error("Database error listing blogs: %s", str(e), exc_info=True)
            raise DatabaseError(
                message="Could not retrieve blogs. Please try again.",
                context={"error_type": type(e).__name__},
            )
        return serialize_documents(blogs)

    async def list_featured_blogs(self, db: Database) -> List[Dict[str, Any]]:
        """
        The most recent blogs, at most FEATURED_BLOGS_LIMIT of them.

        Always a prefix of list_blogs() for the same collection state.
        """
        try:
            cursor = db.blogs.find({}).sort("_id", DESCENDING).limit(FEATURED_BLOGS_LIMIT)
            blogs = await cursor.to_list(length=None)
        except PyMongoError as e:
            logger.error("Database error listing featured blogs: %s", str(e), exc_info=True)
            raise DatabaseError(
                message="Could not retrieve featured blogs. Please try again.",
                context={"error_type": type(e).__name__},
            )
        return serialize_documents(blogs)

    async def create_blog(self, db: Database, document: Dict[str, Any]) -> InsertAck:
        """
        Insert a blog document exactly as received.

        Args:
            db:        Database handle (injected by FastAPI)
            document:  Arbitrary JSON object from the request body

        Returns:
            InsertAck with the store-assigned identifier
        """
        try:
            result = await db.blogs.insert_one(document)
        except PyMongoError as e:
            logger.error("Database error inserting blog: %s", str(e), exc_info=True)
            raise DatabaseError(
                message="Could not save the blog. Please try again.",
                context={"error_type": type(e).__name__},
            )
        logger.info("Blog created: %s", result.inserted_id)
        return InsertAck(acknowledged=result.acknowledged, inserted_id=str(result.inserted_id))

    async def get_blog(self, db: Database, blog_id: str) -> Optional[Dict[str, Any]]:
        """
        Retrieve a single blog.

        Raises:
            InvalidIdentifierError: blog_id is malformed; raised before the
                                    store is contacted (→ 400)
            DatabaseError:          Query execution failed (→ 500)

        Returns:
            The blog document, or None when no blog has this identifier.
        """
        oid = to_object_id(blog_id)
        try:
            blog = await db.blogs.find_one({"_id": oid})
        except PyMongoError as e:
            logger.error("Database error fetching blog %s: %s", blog_id, str(e))
            raise DatabaseError(
                message="Could not retrieve the blog. Please try again.",
                context={"blog_id": blog_id, "error_type": type(e).__name__},
            )
        return serialize_document(blog)


# ── Singleton Instance ────────────────────────────────────────────────────
blog_service = BlogService()
