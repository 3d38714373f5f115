from pydantic import BaseModel, Field
from datetime import datetime
from typing import List, Literal, Optional

MediaType = Literal["image/jpeg", "image/png", "image/gif", "image/webp"]


class ChannelCreate(BaseModel):
    name: str = Field(min_length=1, max_length=100)
    description: Optional[str] = None
    intern_ids: List[int] = []


class ChannelResponse(BaseModel):
    id: int
    name: str
    description: Optional[str] = None
    intern_ids: List[int] = []
    created_by: int
    created_at: datetime

    class Config:
        from_attributes = True


class MessageCreate(BaseModel):
    content: str = ""
    media_url: Optional[str] = Field(default=None, max_length=500)
    media_type: Optional[MediaType] = None


class MessageResponse(BaseModel):
    id: int
    channel_id: int
    user_id: int
    author_name: Optional[str] = None
    content: str
    media_url: Optional[str] = None
    media_type: Optional[str] = None
    created_at: datetime
