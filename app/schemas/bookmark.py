from typing import Optional
from pydantic import BaseModel, field_validator

from app.utils.sanitize import sanitize_html

class BookmarkCreate(BaseModel):
    # Presence is checked by the service so the error names the missing field
    title: Optional[str] = None
    url: Optional[str] = None
    description: Optional[str] = None
    rating: Optional[int] = None

class BookmarkUpdate(BookmarkCreate):
    pass

class BookmarkRead(BaseModel):
    id: int
    title: str
    url: str
    description: str
    rating: int

    @field_validator("title", "url", "description", mode="after")
    @classmethod
    def sanitize_text(cls, v: str) -> str:
        return sanitize_html(v)

    class Config:
        from_attributes = True
