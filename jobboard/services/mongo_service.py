"""
MongoDB helpers shared by the services.

Documents keep ObjectIds and datetimes natively; everything leaving a
service goes through serialize_doc() so ids are plain strings.
"""

from datetime import datetime, timezone
from typing import Any, List, Optional

from bson import ObjectId
from bson.errors import InvalidId

from jobboard.core.errors import ValidationError


# ============================================================
# HELPER: Convert ObjectId to string for JSON serialization
# ============================================================

def _serialize_value(value: Any) -> Any:
    if isinstance(value, ObjectId):
        return str(value)
    if isinstance(value, dict):
        return serialize_doc(value)
    if isinstance(value, list):
        return [_serialize_value(v) for v in value]
    return value


def serialize_doc(doc: Optional[dict]) -> Optional[dict]:
    """Convert MongoDB document to JSON-serializable dict (ObjectIds -> str)."""
    if doc is None:
        return None
    return {key: _serialize_value(value) for key, value in doc.items()}


def serialize_docs(docs) -> List[dict]:
    """Convert list of MongoDB documents to JSON-serializable list."""
    return [serialize_doc(doc) for doc in docs]


def to_object_id(value: Any) -> ObjectId:
    """Parse a client-supplied id; malformed ids are a 400, not a 500."""
    if isinstance(value, ObjectId):
        return value
    try:
        return ObjectId(str(value))
    except (InvalidId, TypeError):
        raise ValidationError("Invalid ID format")


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def page_window(page: int, page_size: int) -> tuple:
    """(skip, limit) for a 1-based page number."""
    return (page - 1) * page_size, page_size
