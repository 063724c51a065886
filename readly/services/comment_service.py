"""
Readly Backend: Comment Service
================================

What:  Insert and list operations for the `comments` collection.
Who:   Called by the /comments route handlers.

Comments are listed in natural store order and are not filtered by blog;
clients group them by their own `blogId` field.
"""

import logging
from typing import Any, Dict, List

from pymongo.errors import PyMongoError

from readly.database import Database
from readly.exceptions import DatabaseError
from readly.schemas.resources import InsertAck
from readly.services.documents import serialize_documents

logger = logging.getLogger(__name__)


class CommentService:
    """Business logic for comment operations."""

    async def create_comment(self, db: Database, document: Dict[str, Any]) -> InsertAck:
        """Insert a comment document exactly as received."""
        try:
            result = await db.comments.insert_one(document)
        except PyMongoError as e:
            logger.error("Database error inserting comment: %s", str(e), exc_info=True)
            raise DatabaseError(
                message="Could not save the comment. Please try again.",
                context={"error_type": type(e).__name__},
            )
        logger.info("Comment created: %s", result.inserted_id)
        return InsertAck(acknowledged=result.acknowledged, inserted_id=str(result.inserted_id))

    async def list_comments(self, db: Database) -> List[Dict[str, Any]]:
        """Every comment, unordered."""
        try:
            comments = await db.comments.find({}).to_list(length=None)
        except PyMongoError as e:
            logger.error("Database error listing comments: %s", str(e), exc_info=True)
            raise DatabaseError(
                message="Could not retrieve comments. Please try again.",
                context={"error_type": type(e).__name__},
            )
        return serialize_documents(comments)


comment_service = CommentService()
