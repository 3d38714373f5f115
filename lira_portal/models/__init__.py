from .department import Department
from .profile import Profile
from .activity import Activity
from .comment import Comment
from .channel import Channel, Message
from .notification import Notification
from .attendance import AttendanceRecord

__all__ = [
    "Department",
    "Profile",
    "Activity",
    "Comment",
    "Channel",
    "Message",
    "Notification",
    "AttendanceRecord",
]
