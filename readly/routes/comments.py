"""
Readly Backend: Comment Route Handlers
=======================================

What:  POST /comments and GET /comments.
"""

from typing import Any, Dict, List

from fastapi import APIRouter, Depends

from readly.database import Database, get_database
from readly.schemas.resources import CommentIn, InsertAck
from readly.services.comment_service import comment_service

router = APIRouter(tags=["Comments"])


@router.post("/comments", response_model=InsertAck, summary="Create a comment")
async def create_comment(payload: CommentIn, db: Database = Depends(get_database)) -> InsertAck:
    return await comment_service.create_comment(db, payload.model_dump())


@router.get("/comments", response_model=List[Dict[str, Any]], summary="List all comments")
async def list_comments(db: Database = Depends(get_database)) -> List[Dict[str, Any]]:
    return await comment_service.list_comments(db)
