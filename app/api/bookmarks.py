import logging
from fastapi import APIRouter, Depends, Request, Response, status
from sqlalchemy.ext.asyncio import AsyncSession
from typing import List, Optional

from app.db.database import get_db
from app.core.security import verify_api_token
from app.core.exceptions import CustomHTTPException
from app.models.bookmark import Bookmark
from app.crud import bookmark as bookmark_crud
from app.schemas.bookmark import BookmarkCreate, BookmarkRead, BookmarkUpdate

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/bookmarks",
    tags=["bookmarks"],
    dependencies=[Depends(verify_api_token)],
)

BOOKMARK_NOT_FOUND = "Bookmark doesn't exist"


async def get_existing_bookmark(db: AsyncSession, bookmark_id: int) -> Bookmark:
    """Existence gate for single-bookmark routes"""
    bookmark = await bookmark_crud.get_bookmark_by_id(db, bookmark_id)
    if bookmark is None:
        logger.error(f"Bookmark with id {bookmark_id} not found")
        raise CustomHTTPException(status_code=404, detail=BOOKMARK_NOT_FOUND)
    return bookmark


@router.get("", response_model=List[BookmarkRead])
async def list_bookmarks(db: AsyncSession = Depends(get_db)):
    """List every stored bookmark"""
    return await bookmark_crud.get_all_bookmarks(db)


@router.post("", response_model=BookmarkRead, status_code=status.HTTP_201_CREATED)
async def create_bookmark(
    request: Request,
    response: Response,
    bookmark: Optional[BookmarkCreate] = None,
    db: AsyncSession = Depends(get_db)
):
    """Create a bookmark; the Location header points at the new resource"""
    candidate = (bookmark or BookmarkCreate()).model_dump()
    try:
        bookmark_crud.validate_new_bookmark(candidate)
    except CustomHTTPException as e:
        logger.error(e.detail)
        raise

    created = await bookmark_crud.insert_bookmark(db, candidate)
    logger.info(f"Bookmark with id {created.id} created")

    response.headers["Location"] = request.app.url_path_for(
        "get_bookmark", bookmark_id=str(created.id)
    )
    return created


@router.get("/{bookmark_id}", response_model=BookmarkRead)
async def get_bookmark(bookmark_id: int, db: AsyncSession = Depends(get_db)):
    return await get_existing_bookmark(db, bookmark_id)


@router.patch("/{bookmark_id}", status_code=status.HTTP_204_NO_CONTENT)
async def update_bookmark(
    bookmark_id: int,
    changes: Optional[BookmarkUpdate] = None,
    db: AsyncSession = Depends(get_db)
):
    """Update any subset of title, url, description and rating"""
    await get_existing_bookmark(db, bookmark_id)

    fields = {
        key: value
        for key, value in (changes or BookmarkUpdate()).model_dump().items()
        if value is not None
    }
    if not fields:
        logger.error(f"Empty update for bookmark {bookmark_id}")
        raise CustomHTTPException(
            status_code=400,
            detail="Request body must contain either 'title', 'url', 'description' or 'rating'"
        )
    if "title" in fields:
        bookmark_crud.validate_title(fields["title"])
    if "rating" in fields:
        bookmark_crud.validate_rating(fields["rating"])

    updated = await bookmark_crud.update_bookmark(db, bookmark_id, fields)
    if not updated:
        raise CustomHTTPException(status_code=404, detail=BOOKMARK_NOT_FOUND)

    logger.info(f"Bookmark with id {bookmark_id} updated")
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.delete("/{bookmark_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_bookmark(bookmark_id: int, db: AsyncSession = Depends(get_db)):
    await get_existing_bookmark(db, bookmark_id)

    deleted = await bookmark_crud.delete_bookmark(db, bookmark_id)
    if not deleted:
        # Another request removed it between the gate and the delete
        raise CustomHTTPException(status_code=404, detail=BOOKMARK_NOT_FOUND)

    logger.info(f"Bookmark with id {bookmark_id} deleted")
    return Response(status_code=status.HTTP_204_NO_CONTENT)
