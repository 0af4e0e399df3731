from typing import Optional
from sqlmodel import SQLModel, Field

class BookmarkBase(SQLModel):
    title: str
    url: str
    description: str
    rating: int

class Bookmark(BookmarkBase, table=True):
    """A saved link. `id` is generated by the database and never reused."""
    __tablename__ = "bookmarks"
    # keeps SQLite from handing out the id of a deleted last row again
    __table_args__ = {"sqlite_autoincrement": True}

    id: Optional[int] = Field(default=None, primary_key=True)
