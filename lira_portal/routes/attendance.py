"""
Attendance routes: daily records derived from activity submissions.
"""
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
from sqlalchemy import func
from typing import List, Optional
from datetime import date, datetime, time, timedelta

from ..database import get_db
from ..models.activity import Activity
from ..models.attendance import AttendanceRecord
from ..models.profile import Profile
from ..auth import get_reviewer
from ..schemas.attendance import AttendanceResponse, AttendanceUpdate
from ..responses import not_found
from ..logging_config import api_logger

router = APIRouter(prefix="/api/attendance", tags=["attendance"])


def day_bounds(day: date):
    start = datetime.combine(day, time.min)
    return start, start + timedelta(days=1)


def status_for_count(activities_count: int) -> str:
    return "present" if activities_count > 0 else "absent"


@router.post("/generate", response_model=List[AttendanceResponse])
def generate_attendance(
    day: Optional[date] = None,
    db: Session = Depends(get_db),
    current_user: Profile = Depends(get_reviewer),
):
    """Create or refresh one record per active intern for a day."""
    day = day or date.today()
    start, end = day_bounds(day)

    counts = dict(
        db.query(Activity.user_id, func.count(Activity.id))
        .filter(Activity.submitted_at >= start, Activity.submitted_at < end)
        .group_by(Activity.user_id)
        .all()
    )
    interns = db.query(Profile).filter(Profile.role == "intern", Profile.is_active == True).all()  # noqa: E712
    existing = {
        r.user_id: r
        for r in db.query(AttendanceRecord).filter(AttendanceRecord.date == day).all()
    }

    records = []
    for intern in interns:
        activities_count = counts.get(intern.id, 0)
        record = existing.get(intern.id)
        if record is None:
            record = AttendanceRecord(user_id=intern.id, date=day)
            db.add(record)
        record.activities_count = activities_count
        record.status = status_for_count(activities_count)
        record.generated_by = current_user.id
        records.append(record)

    db.commit()
    for record in records:
        db.refresh(record)

    api_logger.info("Attendance generated", day=day.isoformat(), records=len(records))
    return records


@router.patch("/{record_id}", response_model=AttendanceResponse)
def update_attendance(
    record_id: int,
    update: AttendanceUpdate,
    db: Session = Depends(get_db),
    current_user: Profile = Depends(get_reviewer),
):
    """Manually correct a record's status or notes."""
    record = db.query(AttendanceRecord).filter(AttendanceRecord.id == record_id).first()
    if not record:
        not_found("Attendance record", record_id)

    for field, value in update.model_dump(exclude_unset=True).items():
        setattr(record, field, value)

    db.commit()
    db.refresh(record)
    return record
