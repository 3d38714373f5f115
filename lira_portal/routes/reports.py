"""
Printable report data: weekly activity report and attendance report.
"""
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
from typing import List, Optional
from datetime import date, timedelta

from ..database import get_db
from ..models.activity import Activity
from ..models.attendance import AttendanceRecord
from ..models.profile import Profile
from ..auth import get_required_user, get_reviewer, REVIEWER_ROLES
from ..schemas.activity import ActivityResponse
from ..schemas.attendance import AttendanceReportRow
from ..responses import bad_request, forbidden, not_found
from .attendance import day_bounds

router = APIRouter(prefix="/api/reports", tags=["reports"])


def week_range(day: date):
    """Monday to Sunday of the week containing day."""
    monday = day - timedelta(days=day.weekday())
    return monday, monday + timedelta(days=6)


@router.get("/weekly")
def weekly_report(
    week_of: Optional[date] = None,
    user_id: Optional[int] = None,
    db: Session = Depends(get_db),
    current_user: Profile = Depends(get_required_user),
):
    """Activities one intern submitted during a week, oldest first."""
    target_id = user_id if user_id is not None else current_user.id
    if target_id != current_user.id and current_user.role not in REVIEWER_ROLES:
        forbidden("You can only view your own weekly report")

    intern = db.query(Profile).filter(Profile.id == target_id).first()
    if not intern:
        not_found("Profile", target_id)

    week_start, week_end = week_range(week_of or date.today())
    start, _ = day_bounds(week_start)
    _, end = day_bounds(week_end)

    activities = (
        db.query(Activity)
        .filter(
            Activity.user_id == target_id,
            Activity.submitted_at >= start,
            Activity.submitted_at < end,
        )
        .order_by(Activity.submitted_at.asc())
        .all()
    )

    summary = {"total": len(activities), "pending": 0, "approved": 0, "rejected": 0}
    for activity in activities:
        summary[activity.status] = summary.get(activity.status, 0) + 1

    return {
        "week_start": week_start.isoformat(),
        "week_end": week_end.isoformat(),
        "intern": {
            "id": intern.id,
            "full_name": intern.full_name,
            "student_id": intern.student_id,
        },
        "activities": [ActivityResponse.model_validate(a).model_dump(mode="json") for a in activities],
        "summary": summary,
    }


@router.get("/attendance", response_model=List[AttendanceReportRow])
def attendance_report(
    start: Optional[date] = None,
    end: Optional[date] = None,
    db: Session = Depends(get_db),
    current_user: Profile = Depends(get_reviewer),
):
    """Attendance between two dates (default: the last 7 days), newest first."""
    end = end or date.today()
    start = start or end - timedelta(days=7)
    if start > end:
        bad_request("start must not be after end", "INVALID_RANGE")

    rows = (
        db.query(AttendanceRecord, Profile)
        .join(Profile, Profile.id == AttendanceRecord.user_id)
        .filter(AttendanceRecord.date >= start, AttendanceRecord.date <= end)
        .order_by(AttendanceRecord.date.desc(), Profile.full_name)
        .all()
    )
    return [
        AttendanceReportRow(
            id=record.id,
            date=record.date,
            status=record.status,
            activities_count=record.activities_count,
            full_name=profile.full_name,
            student_id=profile.student_id,
        )
        for record, profile in rows
    ]
