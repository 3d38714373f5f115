"""
Dashboard routes for role-aware statistics.
"""
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
from sqlalchemy import func

from ..database import get_db
from ..models.activity import Activity
from ..models.notification import Notification
from ..models.profile import Profile
from ..auth import get_required_user, REVIEWER_ROLES
from ..schemas.dashboard import DashboardStats, RecentActivityItem
from .activities import scoped_activities

router = APIRouter(prefix="/api/dashboard", tags=["dashboard"])


@router.get("", response_model=DashboardStats)
def get_dashboard_stats(
    db: Session = Depends(get_db),
    current_user: Profile = Depends(get_required_user),
):
    counts = dict(
        scoped_activities(db, current_user)
        .with_entities(Activity.status, func.count(Activity.id))
        .group_by(Activity.status)
        .all()
    )

    unread = db.query(Notification).filter(
        Notification.user_id == current_user.id,
        Notification.read == False  # noqa: E712
    ).count()

    recent = (
        scoped_activities(db, current_user)
        .order_by(Activity.submitted_at.desc())
        .limit(5)
        .all()
    )

    is_reviewer = current_user.role in REVIEWER_ROLES
    total_interns = db.query(Profile).filter(Profile.role == "intern").count() if is_reviewer else None

    return DashboardStats(
        role=current_user.role,
        total_activities=sum(counts.values()),
        pending_activities=counts.get("pending", 0),
        approved_activities=counts.get("approved", 0),
        rejected_activities=counts.get("rejected", 0),
        unread_notifications=unread,
        total_interns=total_interns,
        recent_activity=[
            RecentActivityItem(
                id=a.id,
                title=a.title,
                status=a.status,
                submitted_at=a.submitted_at.isoformat(),
                intern_name=a.user.full_name if is_reviewer and a.user else None,
            )
            for a in recent
        ],
    )
