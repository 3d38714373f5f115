"""
Context aggregator: reduces current portal data into a labeled text digest
that is injected into the assistant's system prompt.
"""
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Callable, Dict, List, Optional

from ..logging_config import ai_logger, timed
from .gateway import DataGateway
from .prompts import SYSTEM_CAPABILITIES, role_context

SOURCES = ("activities", "profiles", "departments", "comments")
RECENT_TITLE_SAMPLE = 10


@dataclass
class SourceResult:
    """Outcome of one collection read."""
    name: str
    rows: List[Dict] = field(default_factory=list)
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.error is None


def _unavailable(header: str, result: SourceResult) -> str:
    return f"{header}\n- Data unavailable: {result.error}\n"


def _count(rows: List[Dict], key: str, value: str) -> int:
    return sum(1 for row in rows if row.get(key) == value)


def activities_section(result: SourceResult) -> str:
    header = "ACTIVITIES OVERVIEW:"
    if not result.ok:
        return _unavailable(header, result)
    rows = result.rows
    titles = list(dict.fromkeys(r.get("title") for r in rows[:RECENT_TITLE_SAMPLE] if r.get("title")))
    return (
        f"{header}\n"
        f"- Total Activities: {len(rows)}\n"
        f"- Pending Reviews: {_count(rows, 'status', 'pending')}\n"
        f"- Approved: {_count(rows, 'status', 'approved')}\n"
        f"- Rejected: {_count(rows, 'status', 'rejected')}\n"
        f"- Recent Activity Titles: {', '.join(titles) if titles else 'None'}\n"
    )


def profiles_section(result: SourceResult) -> str:
    header = "USER STATISTICS:"
    if not result.ok:
        return _unavailable(header, result)
    rows = result.rows
    return (
        f"{header}\n"
        f"- Total Users: {len(rows)}\n"
        f"- Interns: {_count(rows, 'role', 'intern')}\n"
        f"- Staff: {_count(rows, 'role', 'staff')}\n"
        f"- Administrators: {_count(rows, 'role', 'admin')}\n"
    )


def departments_section(result: SourceResult) -> str:
    header = "DEPARTMENTS:"
    if not result.ok:
        return _unavailable(header, result)
    lines = [f"- {d['name']}: {d.get('description') or 'No description'}" for d in result.rows]
    return f"{header}\n- Total Departments: {len(result.rows)}\n" + "".join(f"{line}\n" for line in lines)


def engagement_section(result: SourceResult) -> str:
    header = "ENGAGEMENT METRICS:"
    if not result.ok:
        return _unavailable(header, result)
    discussions = {row.get("activity_id") for row in result.rows}
    return (
        f"{header}\n"
        f"- Recent Comments: {len(result.rows)}\n"
        f"- Active Discussions: {len(discussions)}\n"
    )


class ContextAggregator:
    """Builds the context digest from the data gateway.

    The four reads run concurrently. A failing read only degrades its own
    section; gather() never raises and always returns a non-empty string.
    """

    def __init__(
        self,
        gateway: DataGateway,
        activity_limit: int = 50,
        profile_limit: int = 100,
        comment_limit: int = 100,
        max_workers: int = 4,
        clock: Callable[[], datetime] = None,
    ):
        self.gateway = gateway
        self.activity_limit = activity_limit
        self.profile_limit = profile_limit
        self.comment_limit = comment_limit
        self.max_workers = max(1, max_workers)
        self.clock = clock or (lambda: datetime.now(timezone.utc))

    @classmethod
    def from_settings(cls, gateway: DataGateway, settings) -> "ContextAggregator":
        return cls(
            gateway,
            activity_limit=settings.context_activity_limit,
            profile_limit=settings.context_profile_limit,
            comment_limit=settings.context_comment_limit,
            max_workers=settings.context_fetch_workers,
        )

    def _readers(self) -> Dict[str, Callable[[], List[Dict]]]:
        return {
            "activities": lambda: self.gateway.fetch_activities(self.activity_limit),
            "profiles": lambda: self.gateway.fetch_profiles(self.profile_limit),
            "departments": self.gateway.fetch_departments,
            "comments": lambda: self.gateway.fetch_comments(self.comment_limit),
        }

    @timed(ai_logger, stage="context_fetch")
    def fetch_all(self) -> Dict[str, SourceResult]:
        """Run every read and capture per-source success or failure."""
        results: Dict[str, SourceResult] = {}
        with ThreadPoolExecutor(max_workers=self.max_workers) as pool:
            futures = {name: pool.submit(reader) for name, reader in self._readers().items()}
            for name, future in futures.items():
                try:
                    results[name] = SourceResult(name, rows=list(future.result()))
                except Exception as e:
                    ai_logger.bind(source=name).warning("Context source failed", error_message=str(e))
                    results[name] = SourceResult(name, error=str(e) or type(e).__name__)
        return results

    def compose(self, role: str, sources: Dict[str, SourceResult]) -> str:
        sections = [
            activities_section(sources["activities"]),
            profiles_section(sources["profiles"]),
            departments_section(sources["departments"]),
            engagement_section(sources["comments"]),
            f"USER ROLE CONTEXT:\nCurrent user role: {role}\n{role_context(role)}\n",
            SYSTEM_CAPABILITIES,
        ]
        return "\n".join(sections) + (
            "\n\nCURRENT SYSTEM STATUS: Operational"
            f"\nLAST UPDATED: {self.clock().isoformat()}"
        )

    def gather(self, role: str) -> str:
        """Return the digest for a role, degrading instead of failing."""
        try:
            return self.compose(role, self.fetch_all())
        except Exception as e:
            ai_logger.bind(role=role).error("Error gathering context", error=e)
            return f"Context gathering failed: {e}. Proceeding with limited context."
