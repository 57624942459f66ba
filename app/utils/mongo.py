"""
Helpers for moving documents between MongoDB and JSON responses.

MongoDB hands back ObjectId and datetime values that the JSON encoder
cannot handle, and driver results are objects rather than dicts. These
helpers keep that conversion in one place for every route.
"""

from datetime import datetime
from typing import Any, Dict, List, Optional

from bson import ObjectId
from fastapi import HTTPException, status


def parse_object_id(value: str, kind: str = "") -> ObjectId:
    """
    Convert an external id string to an ObjectId.

    Args:
        value: id as received in a path, query or body
        kind: label used in the error message, e.g. "job"

    Raises:
        HTTPException 400 if the value is not a valid ObjectId
    """
    if not isinstance(value, str) or not ObjectId.is_valid(value):
        label = f"{kind} ID" if kind else "ID"
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"Invalid {label}"
        )
    return ObjectId(value)


def _jsonable(value: Any) -> Any:
    if isinstance(value, ObjectId):
        return str(value)
    if isinstance(value, datetime):
        return value.isoformat()
    if isinstance(value, dict):
        return {k: _jsonable(v) for k, v in value.items()}
    if isinstance(value, list):
        return [_jsonable(v) for v in value]
    return value


def serialize_document(document: Optional[Dict[str, Any]]) -> Optional[Dict[str, Any]]:
    """Replace `_id` with a string `id` and stringify nested BSON values."""
    if document is None:
        return None

    result = {k: _jsonable(v) for k, v in document.items() if k != "_id"}
    if "_id" in document:
        result["id"] = str(document["_id"])
    return result


def serialize_documents(documents: List[Dict[str, Any]]) -> List[Dict[str, Any]]:
    return [serialize_document(doc) for doc in documents]


def insert_ack(result) -> Dict[str, Any]:
    return {
        "acknowledged": result.acknowledged,
        "inserted_id": str(result.inserted_id),
    }


def update_ack(result) -> Dict[str, Any]:
    return {
        "acknowledged": result.acknowledged,
        "matched_count": result.matched_count,
        "modified_count": result.modified_count,
    }
