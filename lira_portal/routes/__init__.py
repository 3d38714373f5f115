from .auth import router as auth_router
from .activities import router as activities_router
from .comments import router as comments_router
from .channels import router as channels_router
from .notifications import router as notifications_router
from .profiles import router as profiles_router
from .departments import router as departments_router
from .attendance import router as attendance_router
from .reports import router as reports_router
from .dashboard import router as dashboard_router
from .functions import router as functions_router
from .health import router as health_router

__all__ = [
    "auth_router",
    "activities_router",
    "comments_router",
    "channels_router",
    "notifications_router",
    "profiles_router",
    "departments_router",
    "attendance_router",
    "reports_router",
    "dashboard_router",
    "functions_router",
    "health_router",
]
