"""
Activity model for submitted internship work reports.
"""
from sqlalchemy import Column, Integer, String, Date, DateTime, Text, JSON, ForeignKey
from sqlalchemy.orm import relationship
from datetime import datetime, timezone
from ..database import Base

ACTIVITY_STATUSES = ("pending", "approved", "rejected")


class Activity(Base):
    __tablename__ = "activities"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("profiles.id", ondelete="CASCADE"), nullable=False, index=True)
    title = Column(String(200), nullable=False)
    content = Column(Text, nullable=False)
    generated_content = Column(Text, nullable=True)
    location = Column(JSON, nullable=True)  # {"latitude": .., "longitude": .., "address": ..}
    activity_date = Column(Date, nullable=True)
    status = Column(String(20), default="pending", nullable=False, index=True)  # pending, approved, rejected
    submitted_at = Column(DateTime, default=lambda: datetime.now(timezone.utc), index=True)
    reviewed_at = Column(DateTime, nullable=True)
    reviewed_by = Column(Integer, ForeignKey("profiles.id", ondelete="SET NULL"), nullable=True)
    created_at = Column(DateTime, default=lambda: datetime.now(timezone.utc))
    updated_at = Column(DateTime, default=lambda: datetime.now(timezone.utc), onupdate=lambda: datetime.now(timezone.utc))

    # Relationships
    user = relationship("Profile", back_populates="activities", foreign_keys=[user_id])
    reviewer = relationship("Profile", foreign_keys=[reviewed_by])
    comments = relationship("Comment", back_populates="activity", cascade="all, delete-orphan")
