from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, EmailStr, Field


class NewsArticle(BaseModel):
    id: int
    title: str
    content: str
    summary: Optional[str] = None
    author: Optional[str] = None
    publish_date: datetime
    is_published: bool = False
    image_url: Optional[str] = None
    tags: List[str] = []

    class Config:
        from_attributes = True


class NewsArticleCreate(BaseModel):
    title: str = Field(min_length=1, max_length=255)
    content: str = Field(min_length=1)
    summary: Optional[str] = None
    author: Optional[str] = None
    publish_date: Optional[datetime] = None
    is_published: bool = False
    image_url: Optional[str] = None
    tags: List[str] = []


class NewsArticleUpdate(BaseModel):
    title: Optional[str] = Field(None, min_length=1, max_length=255)
    content: Optional[str] = Field(None, min_length=1)
    summary: Optional[str] = None
    author: Optional[str] = None
    publish_date: Optional[datetime] = None
    is_published: Optional[bool] = None
    image_url: Optional[str] = None
    tags: Optional[List[str]] = None


class Subscriber(BaseModel):
    id: int
    email: str
    subscribed_at: datetime
    is_active: bool = True

    class Config:
        from_attributes = True


class SubscribeRequest(BaseModel):
    email: EmailStr
