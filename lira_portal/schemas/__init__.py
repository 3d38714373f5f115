from .auth import UserCreate, UserLogin, TokenResponse, RefreshRequest
from .profile import ProfileResponse, ProfileUpdate, DepartmentSelection
from .department import DepartmentCreate, DepartmentResponse
from .activity import ActivityCreate, ActivityResponse, ActivityStats
from .comment import CommentCreate, CommentResponse
from .channel import ChannelCreate, ChannelResponse, MessageCreate, MessageResponse
from .notification import NotificationResponse
from .attendance import AttendanceUpdate, AttendanceResponse, AttendanceReportRow
from .dashboard import DashboardStats
from .functions import AssistantRequest, GenerateRequest

__all__ = [
    "UserCreate", "UserLogin", "TokenResponse", "RefreshRequest",
    "ProfileResponse", "ProfileUpdate", "DepartmentSelection",
    "DepartmentCreate", "DepartmentResponse",
    "ActivityCreate", "ActivityResponse", "ActivityStats",
    "CommentCreate", "CommentResponse",
    "ChannelCreate", "ChannelResponse", "MessageCreate", "MessageResponse",
    "NotificationResponse",
    "AttendanceUpdate", "AttendanceResponse", "AttendanceReportRow",
    "DashboardStats",
    "AssistantRequest", "GenerateRequest",
]
