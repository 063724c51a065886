"""
Readly Backend: Pydantic Request/Response Schemas
==================================================

What:  Pydantic models describing the API contract.
How:   FastAPI validates request bodies against the *In models and serializes
       the acknowledgment models; documents themselves are returned as plain
       dicts because the service imposes no schema on them.

Documents are schema-less:
    BlogIn and CommentIn declare no required fields and keep every field the
    client sends (extra="allow"). WishIn requires only the two fields the
    duplicate check reads. Whatever the client sends is stored verbatim.
"""

from typing import Optional

from pydantic import BaseModel, Field


# ══════════════════════════════════════════════════════════════════════════
# Request Models
# ══════════════════════════════════════════════════════════════════════════


class BlogIn(BaseModel):
    """
    Body of POST /blogs.

    Conventionally carries `title` and `content`, but any JSON object is
    accepted and stored as-is.
    """

    model_config = {
        "extra": "allow",
        "json_schema_extra": {
            "examples": [{"title": "Reading in 2024", "content": "Notes on a year of books."}]
        },
    }


class CommentIn(BaseModel):
    """Body of POST /comments. `blogId` is conventional and never checked."""

    model_config = {
        "extra": "allow",
        "json_schema_extra": {
            "examples": [
                {"blogId": "652f1c2b9d1e8a0012345678", "email": "x@y.com", "comment": "Great post"}
            ]
        },
    }


class WishIn(BaseModel):
    """
    Body of POST /wishlist.

    blogId and email identify the wish; a second wish with the same pair is
    rejected with 409. Additional fields are stored alongside them.
    """

    blogId: str = Field(description="Identifier of the wished-for blog (not validated)")
    email: str = Field(description="Email of the user owning the wish (format not validated)")

    model_config = {
        "extra": "allow",
        "json_schema_extra": {
            "examples": [{"blogId": "652f1c2b9d1e8a0012345678", "email": "x@y.com"}]
        },
    }


# ══════════════════════════════════════════════════════════════════════════
# Acknowledgment Models: the store's answer to a write, echoed to the client
# ══════════════════════════════════════════════════════════════════════════


class InsertAck(BaseModel):
    """Result of an insert: whether the write was acknowledged and the new id."""

    model_config = {"populate_by_name": True}

    acknowledged: bool = Field(description="Write acknowledged by the server")
    inserted_id: str = Field(
        alias="insertedId",
        description="Identifier assigned to the new document",
    )


class DeleteAck(BaseModel):
    """Result of a delete. deletedCount is 0 when nothing matched."""

    model_config = {"populate_by_name": True}

    acknowledged: bool = Field(description="Write acknowledged by the server")
    deleted_count: int = Field(
        alias="deletedCount",
        description="Number of documents removed (0 or 1)",
    )


# ══════════════════════════════════════════════════════════════════════════
# Error and Health Models
# ══════════════════════════════════════════════════════════════════════════


class ConflictResponse(BaseModel):
    """Body of the 409 answer to a duplicate wish."""

    message: str = Field(default="Already in wishlist")


class ErrorResponse(BaseModel):
    """
    Standard error envelope.

    Example:
        {
            "error": "invalid_identifier",
            "message": "'abc' is not a valid identifier",
            "details": {"value": "abc"},
            "request_id": "1f0c9a2e"
        }
    """

    error: str = Field(description="Machine-readable error code")
    message: str = Field(description="Human-readable error description")
    details: Optional[dict] = Field(default=None, description="Additional error context")
    request_id: Optional[str] = Field(default=None, description="Request correlation ID")


class HealthResponse(BaseModel):
    """Service and database status returned by GET /health."""

    status: str = Field(description="Overall service status: healthy or unhealthy")
    version: str = Field(description="Application version")
    database: str = Field(description="Database connectivity: connected, disconnected")
    uptime_seconds: float = Field(description="Seconds since service started")
