"""
Readly Backend: Document Helpers
=================================

What:  Identifier parsing and BSON-to-JSON conversion shared by the services.
How:   to_object_id() validates path identifiers before any store access;
       serialize_document() renders ObjectId and datetime values as strings
       so FastAPI can encode documents it knows nothing about.
"""

from datetime import datetime
from typing import Any, Dict, List, Optional

from bson import ObjectId
from bson.errors import InvalidId

from readly.exceptions import InvalidIdentifierError


def to_object_id(value: str) -> ObjectId:
    """
    Parse a 24-character hex string into an ObjectId.

    Raises:
        InvalidIdentifierError: value is not a valid ObjectId (→ 400)
    """
    # ObjectId(None) would mint a fresh id instead of failing
    if not isinstance(value, str):
        raise InvalidIdentifierError(value=str(value))
    try:
        return ObjectId(value)
    except InvalidId:
        raise InvalidIdentifierError(value=value)


def _to_json(value: Any) -> Any:
    if isinstance(value, ObjectId):
        return str(value)
    if isinstance(value, datetime):
        return value.isoformat()
    if isinstance(value, dict):
        return {key: _to_json(item) for key, item in value.items()}
    if isinstance(value, (list, tuple)):
        return [_to_json(item) for item in value]
    return value


def serialize_document(document: Optional[Dict[str, Any]]) -> Optional[Dict[str, Any]]:
    """
    Convert a stored document into JSON-safe form, keeping every key.

    `_id` stays `_id`; its value becomes the hex string clients use in
    /blogs/{id} and /wishlist/{id}. None passes through unchanged.
    """
    if document is None:
        return None
    return _to_json(document)


def serialize_documents(documents: List[Dict[str, Any]]) -> List[Dict[str, Any]]:
    return [serialize_document(document) for document in documents]
