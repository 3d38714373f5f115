from pydantic import BaseModel
from datetime import date
from typing import Literal, Optional


class AttendanceUpdate(BaseModel):
    status: Optional[Literal["present", "absent", "partial"]] = None
    notes: Optional[str] = None


class AttendanceResponse(BaseModel):
    id: int
    user_id: int
    date: date
    status: str
    activities_count: int
    notes: Optional[str] = None
    generated_by: Optional[int] = None

    class Config:
        from_attributes = True


class AttendanceReportRow(BaseModel):
    id: int
    date: date
    status: str
    activities_count: int
    full_name: str
    student_id: Optional[str] = None
