"""
Read-only access to the collections summarized in the assistant context.

Every read opens its own session so the aggregator can run them side by side.
"""
from typing import Callable, Dict, List, Optional

from sqlalchemy.orm import Session

from ..models import Activity, Comment, Department, Profile


def _iso(value) -> Optional[str]:
    return value.isoformat() if value else None


class DataGateway:
    """Fetches capped row sets as plain dictionaries."""

    def __init__(self, session_factory: Callable[[], Session]):
        self.session_factory = session_factory

    def _read(self, query_fn: Callable[[Session], list], to_dict: Callable) -> List[Dict]:
        session = self.session_factory()
        try:
            return [to_dict(row) for row in query_fn(session)]
        finally:
            session.close()

    def fetch_activities(self, limit: int) -> List[Dict]:
        return self._read(
            lambda s: s.query(Activity).order_by(Activity.submitted_at.desc()).limit(limit).all(),
            lambda a: {
                "id": a.id,
                "user_id": a.user_id,
                "title": a.title,
                "status": a.status,
                "submitted_at": _iso(a.submitted_at),
            },
        )

    def fetch_profiles(self, limit: int) -> List[Dict]:
        return self._read(
            lambda s: s.query(Profile).order_by(Profile.id).limit(limit).all(),
            lambda p: {
                "id": p.id,
                "full_name": p.full_name,
                "role": p.role,
                "department_id": p.department_id,
            },
        )

    def fetch_departments(self) -> List[Dict]:
        return self._read(
            lambda s: s.query(Department).order_by(Department.name).all(),
            lambda d: {"id": d.id, "name": d.name, "description": d.description},
        )

    def fetch_comments(self, limit: int) -> List[Dict]:
        return self._read(
            lambda s: s.query(Comment).order_by(Comment.created_at.desc()).limit(limit).all(),
            lambda c: {"id": c.id, "activity_id": c.activity_id, "user_id": c.user_id},
        )
