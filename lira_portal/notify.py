"""
Helpers that queue in-app notifications on the current session.
Callers commit together with the change that triggered them.
"""
from sqlalchemy.orm import Session

from .models.activity import Activity
from .models.notification import Notification


def notify(db: Session, user_id: int, type: str, title: str, message: str) -> Notification:
    notification = Notification(user_id=user_id, type=type, title=title, message=message)
    db.add(notification)
    return notification


def notify_activity_reviewed(db: Session, activity: Activity, status: str) -> Notification:
    return notify(
        db,
        activity.user_id,
        f"activity_{status}",
        f"Activity {status}",
        f"Your activity \"{activity.title}\" has been {status}.",
    )


def notify_new_comment(db: Session, activity: Activity, author_name: str) -> Notification:
    return notify(
        db,
        activity.user_id,
        "comment",
        "New comment",
        f"{author_name} commented on \"{activity.title}\".",
    )
