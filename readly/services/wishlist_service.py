"""
Readly Backend: Wishlist Service
=================================

What:  List, add and remove operations for the `wishlist` collection.
Who:   Called by the /wishlist route handlers.

Duplicate Prevention:
    A user may wish for a given blog only once: at most one document per
    (blogId, email) pair.

    1. find_one({blogId, email}); if a wish exists → AlreadyExistsError
    2. insert_one(wish)
    3. DuplicateKeyError from the unique (blogId, email) index → AlreadyExistsError;
       any other duplicate key (the `_id_` index) → DatabaseError

    Two concurrent requests for the same pair can both pass step 1. The unique
    index created by Database.ensure_indexes() makes exactly one of the inserts
    succeed; the other surfaces as the same 409 answer as step 1.

Deletion:
    By identifier only. There is no ownership check, and deleting an
    identifier that matches nothing is acknowledged with deletedCount 0.
"""

import logging
from typing import Any, Dict, List

from pymongo import DESCENDING
from pymongo.errors import DuplicateKeyError, PyMongoError

from readly.database import WISH_PAIR_INDEX, Database
from readly.exceptions import AlreadyExistsError, DatabaseError
from readly.schemas.resources import DeleteAck, InsertAck
from readly.services.documents import serialize_documents, to_object_id

logger = logging.getLogger(__name__)


def _key_pattern(error: DuplicateKeyError) -> Dict[str, Any]:
    return (error.details or {}).get("keyPattern") or {}


def _violates_wish_pair_index(error: DuplicateKeyError) -> bool:
    """
    True only for a violation of the (blogId, email) index.

    The `_id_` index is unique too. Servers report the violated key in
    details["keyPattern"]; older ones only name the index in the message.
    """
    pattern = _key_pattern(error)
    if pattern:
        return set(pattern) == {"blogId", "email"}
    return WISH_PAIR_INDEX in str(error)


class WishlistService:
    """
    Business logic for wishlist operations.

    Responsibilities:
        - list_wishes(): wishes of one email, newest first
        - add_wish(): insert guarded by the duplicate check and unique index
        - remove_wish(): delete by identifier
    """

    async def list_wishes(self, db: Database, email: str) -> List[Dict[str, Any]]:
        """Wishes whose `email` equals the argument exactly, `_id` descending."""
        try:
            cursor = db.wishlist.find({"email": email}).sort("_id", DESCENDING)
            wishes = await cursor.to_list(length=None)
        except PyMongoError as e:
            logger.error("Database error listing wishlist: %s", str(e), exc_info=True)
            raise DatabaseError(
                message="Could not retrieve the wishlist. Please try again.",
                context={"error_type": type(e).__name__},
            )
        return serialize_documents(wishes)

    async def add_wish(self, db: Database, wish: Dict[str, Any]) -> InsertAck:
        """
        Save a wish unless the same (blogId, email) pair is already saved.

        Args:
            db:    Database handle
            wish:  Request body; must contain `blogId` and `email`

        Raises:
            AlreadyExistsError: The pair is already in the wishlist (→ 409)
            DatabaseError:      Lookup or insert failed (→ 500)
        """
        key = {"blogId": wish["blogId"], "email": wish["email"]}
        try:
            existing = await db.wishlist.find_one(key)
            if existing is not None:
                logger.info("Wish already exists for blog %s", key["blogId"])
                raise AlreadyExistsError(context={"blogId": key["blogId"]})
            result = await db.wishlist.insert_one(wish)
        except DuplicateKeyError as e:
            if not _violates_wish_pair_index(e):
                # e.g. a client-supplied `_id` already taken by another wish
                logger.error("Duplicate key on wishlist insert: %s", str(e))
                raise DatabaseError(
                    message="Could not update the wishlist. Please try again.",
                    context={"error_type": type(e).__name__, "key_pattern": _key_pattern(e)},
                )
            # Lost the race against a concurrent insert of the same pair
            logger.info("Concurrent duplicate wish rejected for blog %s", key["blogId"])
            raise AlreadyExistsError(context={"blogId": key["blogId"], "source": "unique_index"})
        except PyMongoError as e:
            logger.error("Database error adding wish: %s", str(e), exc_info=True)
            raise DatabaseError(
                message="Could not update the wishlist. Please try again.",
                context={"error_type": type(e).__name__},
            )
        logger.info("Wish created: %s", result.inserted_id)
        return InsertAck(acknowledged=result.acknowledged, inserted_id=str(result.inserted_id))

    async def remove_wish(self, db: Database, wish_id: str) -> DeleteAck:
        """
        Delete one wish by identifier.

        Raises:
            InvalidIdentifierError: wish_id is malformed (→ 400)
            DatabaseError:          Delete failed (→ 500)
        """
        oid = to_object_id(wish_id)
        try:
            result = await db.wishlist.delete_one({"_id": oid})
        except PyMongoError as e:
            logger.error("Database error deleting wish %s: %s", wish_id, str(e))
            raise DatabaseError(
                message="Could not update the wishlist. Please try again.",
                context={"wish_id": wish_id, "error_type": type(e).__name__},
            )
        logger.info("Wish %s removed (deleted=%d)", wish_id, result.deleted_count)
        return DeleteAck(acknowledged=result.acknowledged, deleted_count=result.deleted_count)


wishlist_service = WishlistService()
