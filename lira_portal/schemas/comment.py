from pydantic import BaseModel, Field
from datetime import datetime
from typing import Optional


class CommentCreate(BaseModel):
    content: str = Field(min_length=1)


class CommentResponse(BaseModel):
    id: int
    activity_id: int
    user_id: int
    author_name: Optional[str] = None
    content: str
    created_at: datetime
