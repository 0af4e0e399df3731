"""
Bookmark persistence operations:
- select all / select by id
- insert returning the stored row with its generated id
- update and delete by id filter, returning the affected row count
"""

from typing import Any, Dict, List, Mapping, Optional
from sqlalchemy import delete, update
from sqlalchemy.ext.asyncio import AsyncSession
from sqlmodel import select

from app.models.bookmark import Bookmark
from app.core.exceptions import CustomHTTPException

REQUIRED_FIELDS = ("title", "url", "description", "rating")
MIN_RATING = 1
MAX_RATING = 5
# Largest value a SQL INTEGER primary key can hold
MAX_BOOKMARK_ID = 2**31 - 1


def find_missing_field(candidate: Mapping[str, Any]) -> Optional[str]:
    """Return the first required field that is absent or null, if any"""
    for field in REQUIRED_FIELDS:
        if candidate.get(field) is None:
            return field
    return None


def validate_title(title: str) -> None:
    if not title.strip():
        raise CustomHTTPException(
            status_code=400,
            detail="'title' must not be empty"
        )


def validate_rating(rating: Any) -> None:
    if isinstance(rating, bool) or not isinstance(rating, (int, float)) \
            or not MIN_RATING <= rating <= MAX_RATING:
        raise CustomHTTPException(
            status_code=400,
            detail=f"'rating' must be a number between {MIN_RATING} and {MAX_RATING}"
        )


def validate_new_bookmark(candidate: Mapping[str, Any]) -> None:
    """Raise a 400 before anything is written if the candidate is incomplete"""
    missing = find_missing_field(candidate)
    if missing:
        raise CustomHTTPException(
            status_code=400,
            detail=f"Missing '{missing}' in request body"
        )
    validate_title(candidate["title"])
    validate_rating(candidate["rating"])


def is_storable_id(bookmark_id: int) -> bool:
    """Ids outside the column's range can never match a row"""
    return 1 <= bookmark_id <= MAX_BOOKMARK_ID


async def get_all_bookmarks(db: AsyncSession) -> List[Bookmark]:
    result = await db.execute(select(Bookmark))
    return list(result.scalars().all())


async def get_bookmark_by_id(db: AsyncSession, bookmark_id: int) -> Optional[Bookmark]:
    if not is_storable_id(bookmark_id):
        return None
    result = await db.execute(select(Bookmark).where(Bookmark.id == bookmark_id))
    return result.scalars().first()


async def insert_bookmark(db: AsyncSession, fields: Mapping[str, Any]) -> Bookmark:
    """Insert a bookmark and return the stored row, including its new id"""
    bookmark = Bookmark(**{field: fields[field] for field in REQUIRED_FIELDS})
    try:
        db.add(bookmark)
        await db.commit()
        await db.refresh(bookmark)
        return bookmark
    except Exception:
        await db.rollback()
        raise


async def update_bookmark(db: AsyncSession, bookmark_id: int, fields: Dict[str, Any]) -> int:
    if not is_storable_id(bookmark_id):
        return 0
    try:
        result = await db.execute(
            update(Bookmark).where(Bookmark.id == bookmark_id).values(**fields)
        )
        await db.commit()
        return result.rowcount
    except Exception:
        await db.rollback()
        raise


async def delete_bookmark(db: AsyncSession, bookmark_id: int) -> int:
    """Delete by id filter. Returns 0 when the row is already gone."""
    if not is_storable_id(bookmark_id):
        return 0
    try:
        result = await db.execute(delete(Bookmark).where(Bookmark.id == bookmark_id))
        await db.commit()
        return result.rowcount
    except Exception:
        await db.rollback()
        raise
