"""
Readly Backend: Custom Exception Hierarchy
===========================================

What:  Application-specific exceptions for the error scenarios the API models.
How:   Each exception carries a message and an optional context dict.
       Global exception handlers (registered in main.py) catch these and
       return JSON error responses with the matching HTTP status code.
Who:   Raised by the services; caught by the handlers in main.py.

Exception Hierarchy:
    ReadlyError (base)
    ├── InvalidIdentifierError   → 400 Bad Request
    ├── AlreadyExistsError       → 409 Conflict
    └── DatabaseError            → 500 Internal Server Error
"""

from typing import Any, Dict, Optional


class ReadlyError(Exception):
    """
    Base exception for all Readly application errors.

    Attributes:
        message:  User-facing error description (safe to return in API response)
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


class InvalidIdentifierError(ReadlyError):
    """
    Raised when a path parameter is not a valid document identifier.

    When:    GET /blogs/{id} or DELETE /wishlist/{id} with anything other than
             a 24-character hex ObjectId.
    HTTP:    400 Bad Request

    Raised before the store is contacted.
    """

    def __init__(
        self,
        value: str = "",
        context: Optional[Dict[str, Any]] = None,
    ):
        ctx = context or {}
        ctx["value"] = value
        super().__init__(
            message=f"'{value}' is not a valid identifier",
            context=ctx,
        )
        self.value = value


class AlreadyExistsError(ReadlyError):
    """
    Raised when an insert would duplicate a document that must be unique.

    When:    POST /wishlist for a (blogId, email) pair that is already saved,
             whether caught by the lookup or by the unique index.
    HTTP:    409 Conflict, body {"message": "Already in wishlist"}
    """

    def __init__(
        self,
        message: str = "Already in wishlist",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)


class DatabaseError(ReadlyError):
    """
    Raised when a database operation fails unexpectedly.

    What:    A find, insert or delete failed inside the driver.
    When:    Server selection timeout, lost connection, authentication failure.
    HTTP:    500 Internal Server Error

    The message returned to the client is always generic. The driver error
    type is kept in `context` and logged server-side only.
    """

    def __init__(
        self,
        message: str = "A database error occurred. Please try again later.",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)
