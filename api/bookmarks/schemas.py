"""
Bookmark API schemas (request/response models).
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel


class CreateBookmarkRequest(BaseModel):
    # Fields stay loosely typed so the service can report the first missing or
    # invalid field with its own message instead of a generic 422.
    title: Any = None
    url: Any = None
    description: Any = None
    rating: Any = None
