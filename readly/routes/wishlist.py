"""
Readly Backend: Wishlist Route Handlers
========================================

What:  GET /wishlist?email=, POST /wishlist and DELETE /wishlist/{id}.
How:   Delegates to WishlistService. A duplicate wish surfaces as
       AlreadyExistsError, which the global handler answers with
       HTTP 409 {"message": "Already in wishlist"}.
"""

from typing import Any, Dict, List

from fastapi import APIRouter, Depends, Query

from readly.database import Database, get_database
from readly.schemas.resources import ConflictResponse, DeleteAck, ErrorResponse, InsertAck, WishIn
from readly.services.wishlist_service import wishlist_service

router = APIRouter(prefix="/wishlist", tags=["Wishlist"])


@router.get(
    "",
    response_model=List[Dict[str, Any]],
    summary="List the wishlist of one user, newest first",
)
async def list_wishes(
    email: str = Query(..., description="Owner email; matched exactly"),
    db: Database = Depends(get_database),
) -> List[Dict[str, Any]]:
    return await wishlist_service.list_wishes(db, email)


@router.post(
    "",
    response_model=InsertAck,
    responses={
        200: {"description": "Wish saved", "model": InsertAck},
        409: {"description": "This blog is already in the user's wishlist", "model": ConflictResponse},
    },
    summary="Add a blog to a user's wishlist",
)
async def add_wish(payload: WishIn, db: Database = Depends(get_database)) -> InsertAck:
    return await wishlist_service.add_wish(db, payload.model_dump())


@router.delete(
    "/{wish_id}",
    response_model=DeleteAck,
    responses={
        200: {"description": "Delete acknowledged (deletedCount may be 0)", "model": DeleteAck},
        400: {"description": "Malformed identifier", "model": ErrorResponse},
    },
    summary="Remove a wish by ID",
)
async def remove_wish(wish_id: str, db: Database = Depends(get_database)) -> DeleteAck:
    return await wishlist_service.remove_wish(db, wish_id)
