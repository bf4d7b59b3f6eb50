"""
Digital Life Lessons API — MongoDB Document Helpers
=====================================================

What:  Builders for new documents and conversion of stored documents to JSON.
Why:   MongoDB has no table schema; these functions are the one place where
       server-assigned fields (timestamps, counters, defaults) are decided.
How:   Plain dicts in, plain dicts out. ObjectIds are rendered as hex strings
       so FastAPI can serialize them.

Document Shapes:
    users:      email, createdAt, isPremium, role, + free-form fields
    lessons:    free-form content, category, emotionalTone, accessLevel,
                createdAt, likes[], likesCount, favoritesCount
    comments:   lessonId, commenterEmail, commenterName, comment, createdAt
    reports:    lessonId, reporterEmail, reason, createdAt
    favorites:  lessonId, userEmail, createdAt

    lessonId in comments/reports/favorites is the lesson's hex id stored as a
    string; nothing enforces that the lesson exists.
"""

from datetime import datetime, timezone
from typing import Any, Dict, Optional

from bson import ObjectId


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def parse_object_id(value: str) -> Optional[ObjectId]:
    """Return the ObjectId for a hex string, or None if it is not one."""
    if isinstance(value, ObjectId):
        return value
    if not ObjectId.is_valid(value):
        return None
    return ObjectId(value)


def _public_value(value: Any) -> Any:
    if isinstance(value, ObjectId):
        return str(value)
    if isinstance(value, dict):
        return {k: _public_value(v) for k, v in value.items()}
    if isinstance(value, list):
        return [_public_value(item) for item in value]
    return value


def to_public(doc: Optional[Dict[str, Any]]) -> Optional[Dict[str, Any]]:
    """
    Convert a stored document into a JSON-serializable dict.

    `_id` keeps its key (clients address lessons by it) but becomes a string.
    ObjectIds are converted at any depth, inside nested documents and lists
    (e.g. `recommended`).
    """
    if not doc:
        return doc
    return _public_value(doc)


def insert_result(result) -> Dict[str, Any]:
    """Render a pymongo InsertOneResult the way the API returns it."""
    return {"acknowledged": result.acknowledged, "insertedId": str(result.inserted_id)}


def delete_result(result) -> Dict[str, Any]:
    """Render a pymongo DeleteResult the way the API returns it."""
    return {"acknowledged": result.acknowledged, "deletedCount": result.deleted_count}


# ── Document Builders ─────────────────────────────────────────────────────

def new_user_document(fields: Dict[str, Any]) -> Dict[str, Any]:
    """Server-owned fields override whatever the client sent."""
    return {
        **fields,
        "createdAt": utcnow(),
        "isPremium": False,
        "role": "user",
    }


def new_lesson_document(fields: Dict[str, Any]) -> Dict[str, Any]:
    """New lessons start with an empty liker set and zeroed counters."""
    return {
        **fields,
        "createdAt": utcnow(),
        "likes": [],
        "likesCount": 0,
        "favoritesCount": 0,
    }


def new_comment_document(
    lesson_id: str,
    commenter_email: Optional[str],
    commenter_name: Optional[str],
    comment: str,
) -> Dict[str, Any]:
    return {
        "lessonId": lesson_id,
        "commenterEmail": commenter_email,
        "commenterName": commenter_name,
        "comment": comment,
        "createdAt": utcnow(),
    }


def new_report_document(lesson_id: str, reporter_email: str, reason: Optional[str]) -> Dict[str, Any]:
    return {
        "lessonId": lesson_id,
        "reporterEmail": reporter_email,
        "reason": reason,
        "createdAt": utcnow(),
    }


def new_favorite_document(lesson_id: str, user_email: str) -> Dict[str, Any]:
    return {
        "lessonId": lesson_id,
        "userEmail": user_email,
        "createdAt": utcnow(),
    }
