"""
Bookmark business logic.

Scope:
- create-request validation (first failing field wins)
- output sanitization of every field sent back to a client
- thin orchestration over `repository`
"""

from __future__ import annotations

import logging
import re
from typing import Any
from urllib.parse import urlsplit

import bleach
from fastapi import HTTPException, status
from pydantic import AnyHttpUrl, TypeAdapter, ValidationError

from core import db as core_db

from . import repository, schemas

logger = logging.getLogger(__name__)

REQUIRED_FIELDS = ("title", "url", "rating")
MIN_RATING = 0
MAX_RATING = 5
# `bookmarks.id` is a Postgres INTEGER.
MAX_BOOKMARK_ID = 2**31 - 1
WEB_SCHEMES = ("http", "https")

_web_url = TypeAdapter(AnyHttpUrl)
# RFC 3986 unreserved + reserved characters, plus `%` for escapes.
_URI_CHARS = re.compile(r"[A-Za-z0-9\-._~:/?#\[\]@!$&'()*+,;=%]+")


def _bad_request(message: str) -> HTTPException:
    return HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=message)


def _is_missing(field: str, value: Any) -> bool:
    if isinstance(value, str):
        return not value.strip()
    # 0 is a real rating.
    if field == "rating" and isinstance(value, (int, float)) and not isinstance(value, bool):
        return False
    return not value


def _parse_rating(value: Any) -> int | None:
    # JSON booleans decode to bool, which is an int subclass.
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, float) and value.is_integer():
        return int(value)
    return None


def is_web_url(value: Any) -> bool:
    """
    True for an absolute http(s) URI written as `scheme://host...` using only
    legal URI characters. Input the URL parser would have to repair is rejected.
    """
    if not isinstance(value, str) or not _URI_CHARS.fullmatch(value):
        return False

    try:
        parts = urlsplit(value)
        parts.port  # raises on a malformed port
    except ValueError:
        return False
    if parts.scheme.lower() not in WEB_SCHEMES:
        return False
    if not value[len(parts.scheme):].startswith("://"):
        return False
    if not parts.netloc or not parts.hostname:
        return False

    try:
        _web_url.validate_python(value)
    except ValidationError:
        return False
    return True


def validate_new_bookmark(payload: schemas.CreateBookmarkRequest) -> dict[str, Any]:
    """
    Return the record to insert, or raise a 400 for the first bad field.
    """
    for field in REQUIRED_FIELDS:
        if _is_missing(field, getattr(payload, field)):
            logger.warning("bookmark_rejected reason=missing field=%s", field)
            raise _bad_request(f"'{field}' is required")

    if not isinstance(payload.title, str):
        logger.warning("bookmark_rejected reason=invalid_title")
        raise _bad_request("'title' must be a string")

    rating = _parse_rating(payload.rating)
    if rating is None or not (MIN_RATING <= rating <= MAX_RATING):
        logger.warning("bookmark_rejected reason=invalid_rating rating=%r", payload.rating)
        raise _bad_request(f"'rating' must be a number between {MIN_RATING} and {MAX_RATING}")

    if not is_web_url(payload.url):
        logger.warning("bookmark_rejected reason=invalid_url url=%r", payload.url)
        raise _bad_request("'url' must be a valid URL")

    description = payload.description
    if description is not None and not isinstance(description, str):
        logger.warning("bookmark_rejected reason=invalid_description")
        raise _bad_request("'description' must be a string")

    return {
        "title": payload.title,
        "url": payload.url,
        "description": description or "",
        "rating": rating,
    }


def _clean_text(value: Any) -> str:
    if value is None:
        return ""
    # Markup is escaped; a bare `&` is returned as submitted.
    return bleach.clean(str(value)).replace("&amp;", "&")


def _clean_rating(value: Any) -> int | float | str:
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return value
    for cast in (int, float):
        try:
            return cast(value)
        except (TypeError, ValueError):
            continue
    return _clean_text(value)


def serialize_bookmark(row: dict) -> dict:
    return {
        "id": row["id"],
        "title": _clean_text(row.get("title")),
        "url": _clean_text(row.get("url")),
        "description": _clean_text(row.get("description")),
        "rating": _clean_rating(row.get("rating")),
    }


async def list_bookmarks(db: core_db.Database) -> list[dict]:
    rows = await repository.list_bookmarks(db)
    return [serialize_bookmark(row) for row in rows]


async def create_bookmark(db: core_db.Database, payload: schemas.CreateBookmarkRequest) -> dict:
    new_bookmark = validate_new_bookmark(payload)
    row = await repository.insert_bookmark(db, **new_bookmark)
    logger.info("bookmark_created id=%s", row["id"])
    return serialize_bookmark(row)


async def get_bookmark_or_404(db: core_db.Database, bookmark_id: int) -> dict:
    row = None
    if -MAX_BOOKMARK_ID - 1 <= bookmark_id <= MAX_BOOKMARK_ID:
        row = await repository.get_bookmark_by_id(db, bookmark_id)
    if row is None:
        logger.warning("bookmark_not_found id=%s", bookmark_id)
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Bookmark Not Found",
        )
    return row


async def delete_bookmark(db: core_db.Database, bookmark_id: int) -> None:
    removed = await repository.delete_bookmark(db, bookmark_id)
    logger.info("bookmark_deleted id=%s removed=%s", bookmark_id, removed)
