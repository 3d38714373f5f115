from pydantic import BaseModel
from typing import List, Optional


class RecentActivityItem(BaseModel):
    id: int
    title: str
    status: str
    submitted_at: str
    intern_name: Optional[str] = None


class DashboardStats(BaseModel):
    role: str
    total_activities: int
    pending_activities: int
    approved_activities: int
    rejected_activities: int
    unread_notifications: int
    total_interns: Optional[int] = None
    recent_activity: List[RecentActivityItem]
