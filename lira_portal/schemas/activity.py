from pydantic import BaseModel, Field
from datetime import date, datetime
from typing import Any, Dict, Optional


class ActivityCreate(BaseModel):
    title: str = Field(min_length=1, max_length=200)
    content: str = Field(min_length=1)
    generated_content: Optional[str] = None
    location: Optional[Dict[str, Any]] = None
    activity_date: Optional[date] = None


class ActivityResponse(BaseModel):
    id: int
    user_id: int
    title: str
    content: str
    generated_content: Optional[str] = None
    location: Optional[Dict[str, Any]] = None
    activity_date: Optional[date] = None
    status: str
    submitted_at: datetime
    reviewed_at: Optional[datetime] = None
    reviewed_by: Optional[int] = None

    class Config:
        from_attributes = True


class ActivityStats(BaseModel):
    total: int = 0
    pending: int = 0
    approved: int = 0
    rejected: int = 0
