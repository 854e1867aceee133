"""
Bookmark persistence (raw SQL).

Every function takes the storage handle explicitly; nothing here validates
or retries.
"""

from __future__ import annotations

from core import db as core_db


async def list_bookmarks(db: core_db.Database) -> list[dict]:
    return await db.fetch_all(
        """
        SELECT id, title, url, description, rating
        FROM bookmarks
        """
    )


async def get_bookmark_by_id(db: core_db.Database, bookmark_id: int) -> dict | None:
    return await db.fetch_one(
        """
        SELECT id, title, url, description, rating
        FROM bookmarks
        WHERE id = $1
        """,
        bookmark_id,
    )


async def insert_bookmark(
    db: core_db.Database,
    *,
    title: str,
    url: str,
    description: str | None,
    rating: int,
) -> dict:
    row = await db.fetch_one(
        """
        INSERT INTO bookmarks (title, url, description, rating)
        VALUES ($1, $2, $3, $4)
        RETURNING id, title, url, description, rating
        """,
        title,
        url,
        description,
        rating,
    )
    if row is None:
        raise RuntimeError("Failed to insert bookmark.")
    return row


async def delete_bookmark(db: core_db.Database, bookmark_id: int) -> int:
    """
    Delete by id and return the number of rows removed (0 or 1).
    """
    status = await db.execute(
        """
        DELETE FROM bookmarks
        WHERE id = $1
        """,
        bookmark_id,
    )
    return core_db.affected_rows(status)
