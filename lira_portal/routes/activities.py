"""
Activity routes: intern submissions and staff review.
"""
from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session
from sqlalchemy import func
from typing import List, Optional
from datetime import datetime, timezone

from ..database import get_db
from ..models.activity import Activity, ACTIVITY_STATUSES
from ..models.profile import Profile
from ..auth import get_required_user, get_reviewer, require_roles, REVIEWER_ROLES
from ..schemas.activity import ActivityCreate, ActivityResponse, ActivityStats
from ..responses import conflict, forbidden, not_found, require, validation_error
from ..notify import notify_activity_reviewed
from ..logging_config import api_logger

router = APIRouter(prefix="/api/activities", tags=["activities"])


def scoped_activities(db: Session, user: Profile):
    """Interns see their own activities; reviewers see everything."""
    query = db.query(Activity)
    if user.role not in REVIEWER_ROLES:
        query = query.filter(Activity.user_id == user.id)
    return query


def get_visible_activity(db: Session, activity_id: int, user: Profile) -> Activity:
    activity = db.query(Activity).filter(Activity.id == activity_id).first()
    if not activity:
        not_found("Activity", activity_id)
    if user.role not in REVIEWER_ROLES and activity.user_id != user.id:
        forbidden("You can only view your own activities")
    return activity


@router.get("", response_model=List[ActivityResponse])
def list_activities(
    status: Optional[str] = None,
    user_id: Optional[int] = None,
    limit: int = Query(default=20, ge=1, le=100),
    offset: int = Query(default=0, ge=0),
    db: Session = Depends(get_db),
    current_user: Profile = Depends(get_required_user),
):
    """List activities in the caller's scope, newest first."""
    query = scoped_activities(db, current_user)
    if status:
        if status not in ACTIVITY_STATUSES:
            validation_error(f"Unknown status '{status}'", {"allowed": list(ACTIVITY_STATUSES)})
        query = query.filter(Activity.status == status)
    if user_id is not None:
        query = query.filter(Activity.user_id == user_id)

    return query.order_by(Activity.submitted_at.desc()).offset(offset).limit(limit).all()


@router.get("/stats", response_model=ActivityStats)
def get_activity_stats(
    db: Session = Depends(get_db),
    current_user: Profile = Depends(get_required_user),
):
    """Counts per status in the caller's scope."""
    rows = (
        scoped_activities(db, current_user)
        .with_entities(Activity.status, func.count(Activity.id))
        .group_by(Activity.status)
        .all()
    )
    counts = {status: count for status, count in rows}
    return ActivityStats(
        total=sum(counts.values()),
        pending=counts.get("pending", 0),
        approved=counts.get("approved", 0),
        rejected=counts.get("rejected", 0),
    )


@router.get("/{activity_id}", response_model=ActivityResponse)
def get_activity(
    activity_id: int,
    db: Session = Depends(get_db),
    current_user: Profile = Depends(get_required_user),
):
    return get_visible_activity(db, activity_id, current_user)


@router.post("", response_model=ActivityResponse)
def create_activity(
    activity_data: ActivityCreate,
    db: Session = Depends(get_db),
    current_user: Profile = Depends(require_roles("intern")),
):
    """Submit a new activity. It always starts as pending."""
    activity = Activity(
        user_id=current_user.id,
        title=require(activity_data.title, "title").strip(),
        content=require(activity_data.content, "content").strip(),
        generated_content=activity_data.generated_content,
        location=activity_data.location,
        activity_date=activity_data.activity_date,
        status="pending",
    )
    db.add(activity)
    db.commit()
    db.refresh(activity)
    api_logger.info("Activity submitted", activity_id=activity.id, user_id=current_user.id)
    return activity


def _review(db: Session, activity_id: int, reviewer: Profile, new_status: str) -> Activity:
    activity = db.query(Activity).filter(Activity.id == activity_id).first()
    if not activity:
        not_found("Activity", activity_id)

    # Conditional update: only a pending activity can be reviewed, first reviewer wins
    updated = (
        db.query(Activity)
        .filter(Activity.id == activity_id, Activity.status == "pending")
        .update(
            {
                Activity.status: new_status,
                Activity.reviewed_at: datetime.now(timezone.utc),
                Activity.reviewed_by: reviewer.id,
            },
            synchronize_session=False,
        )
    )
    if not updated:
        db.rollback()
        db.refresh(activity)
        conflict(f"Activity has already been {activity.status}")

    notify_activity_reviewed(db, activity, new_status)
    db.commit()
    db.refresh(activity)
    api_logger.info(
        "Activity reviewed",
        activity_id=activity.id,
        status=new_status,
        reviewer_id=reviewer.id,
    )
    return activity


@router.post("/{activity_id}/approve", response_model=ActivityResponse)
def approve_activity(
    activity_id: int,
    db: Session = Depends(get_db),
    reviewer: Profile = Depends(get_reviewer),
):
    return _review(db, activity_id, reviewer, "approved")


@router.post("/{activity_id}/reject", response_model=ActivityResponse)
def reject_activity(
    activity_id: int,
    db: Session = Depends(get_db),
    reviewer: Profile = Depends(get_reviewer),
):
    return _review(db, activity_id, reviewer, "rejected")
