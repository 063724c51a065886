"""
Readly Backend: Blog Route Handlers
====================================

What:  GET/POST /blogs, GET /blogs/{id} and GET /featured-blogs.
How:   Each handler reads its parameters, calls one BlogService method and
       returns the result unchanged.
"""

from typing import Any, Dict, List, Optional

from fastapi import APIRouter, Depends

from readly.database import Database, get_database
from readly.schemas.resources import BlogIn, ErrorResponse, InsertAck
from readly.services.blog_service import blog_service

router = APIRouter(tags=["Blogs"])


@router.get(
    "/blogs",
    response_model=List[Dict[str, Any]],
    summary="List all blogs, newest first",
)
async def list_blogs(db: Database = Depends(get_database)) -> List[Dict[str, Any]]:
    return await blog_service.list_blogs(db)


@router.post(
    "/blogs",
    response_model=InsertAck,
    summary="Create a blog",
    description="Stores the JSON body verbatim and returns the insert acknowledgment.",
)
async def create_blog(payload: BlogIn, db: Database = Depends(get_database)) -> InsertAck:
    return await blog_service.create_blog(db, payload.model_dump())


@router.get(
    "/blogs/{blog_id}",
    response_model=Optional[Dict[str, Any]],
    responses={
        200: {"description": "The blog, or null when no blog has this id"},
        400: {"description": "Malformed identifier", "model": ErrorResponse},
    },
    summary="Get a single blog by ID",
)
async def get_blog(blog_id: str, db: Database = Depends(get_database)) -> Optional[Dict[str, Any]]:
    """
    Returns null (HTTP 200) for an unknown but well-formed identifier; only a
    malformed identifier is an error.
    """
    return await blog_service.get_blog(db, blog_id)


@router.get(
    "/featured-blogs",
    response_model=List[Dict[str, Any]],
    summary="List the six most recent blogs",
)
async def list_featured_blogs(db: Database = Depends(get_database)) -> List[Dict[str, Any]]:
    return await blog_service.list_featured_blogs(db)
