"""
Bookmark API endpoints.
"""

from __future__ import annotations

from fastapi import APIRouter, Depends, Response, status

from core.db import Database, get_db

from . import schemas, service

router = APIRouter()


async def bookmark_from_path(bookmark_id: int, db: Database = Depends(get_db)) -> dict:
    """
    Load the bookmark named in the path; 404 stops the request before any handler runs.
    """
    return await service.get_bookmark_or_404(db, bookmark_id)


@router.get("/bookmarks")
async def list_bookmarks(db: Database = Depends(get_db)) -> list[dict]:
    return await service.list_bookmarks(db)


@router.post("/bookmarks", status_code=status.HTTP_201_CREATED)
async def create_bookmark(
    request: schemas.CreateBookmarkRequest,
    response: Response,
    db: Database = Depends(get_db),
) -> dict:
    bookmark = await service.create_bookmark(db, request)
    response.headers["Location"] = f"/bookmarks/{bookmark['id']}"
    return bookmark


@router.get("/bookmarks/{bookmark_id}")
async def get_bookmark(bookmark: dict = Depends(bookmark_from_path)) -> dict:
    return service.serialize_bookmark(bookmark)


@router.delete("/bookmarks/{bookmark_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_bookmark(
    bookmark: dict = Depends(bookmark_from_path),
    db: Database = Depends(get_db),
) -> Response:
    await service.delete_bookmark(db, int(bookmark["id"]))
    return Response(status_code=status.HTTP_204_NO_CONTENT)
