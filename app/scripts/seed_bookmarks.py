import asyncio
import logging
from app.db.database import AsyncSessionLocal, init_db
from app.crud.bookmark import insert_bookmark, validate_new_bookmark

logger = logging.getLogger(__name__)

SAMPLE_BOOKMARKS = [
    {
        "title": "Python documentation",
        "url": "https://docs.python.org/3/",
        "description": "Official language reference and library docs",
        "rating": 5,
    },
    {
        "title": "FastAPI",
        "url": "https://fastapi.tiangolo.com/",
        "description": "Framework docs and tutorial",
        "rating": 4,
    },
    {
        "title": "SQLModel",
        "url": "https://sqlmodel.tiangolo.com/",
        "description": "SQL databases with Python type hints",
        "rating": 4,
    },
]

async def seed_bookmarks(bookmarks=SAMPLE_BOOKMARKS):
    await init_db()
    async with AsyncSessionLocal() as session:
        for data in bookmarks:
            validate_new_bookmark(data)
            bookmark = await insert_bookmark(session, data)
            logger.info(f"Seeded bookmark {bookmark.id}: {bookmark.title}")
    print(f"Inserted {len(bookmarks)} bookmarks.")

if __name__ == "__main__":
    asyncio.run(seed_bookmarks())
