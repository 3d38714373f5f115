"""
Channel routes: group spaces with a flat member list and their messages.
"""
from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session
from typing import List

from ..database import get_db
from ..models.channel import Channel, Message
from ..models.profile import Profile
from ..auth import get_required_user, get_reviewer, REVIEWER_ROLES
from ..schemas.channel import ChannelCreate, ChannelResponse, MessageCreate, MessageResponse
from ..responses import deleted, forbidden, not_found, validation_error
from ..logging_config import api_logger

router = APIRouter(prefix="/api/channels", tags=["channels"])


def can_access(channel: Channel, user: Profile) -> bool:
    return user.role in REVIEWER_ROLES or channel.has_member(user.id)


def get_accessible_channel(db: Session, channel_id: int, user: Profile) -> Channel:
    channel = db.query(Channel).filter(Channel.id == channel_id).first()
    if not channel:
        not_found("Channel", channel_id)
    if not can_access(channel, user):
        forbidden("You are not a member of this channel")
    return channel


def message_to_dict(message: Message) -> dict:
    return {
        "id": message.id,
        "channel_id": message.channel_id,
        "user_id": message.user_id,
        "author_name": message.user.full_name if message.user else None,
        "content": message.content,
        "media_url": message.media_url,
        "media_type": message.media_type,
        "created_at": message.created_at,
    }


@router.get("", response_model=List[ChannelResponse])
def list_channels(
    db: Session = Depends(get_db),
    current_user: Profile = Depends(get_required_user),
):
    """All channels for staff/admin; interns only see channels listing them."""
    channels = db.query(Channel).order_by(Channel.created_at.desc()).all()
    return [c for c in channels if can_access(c, current_user)]


@router.post("", response_model=ChannelResponse)
def create_channel(
    channel_data: ChannelCreate,
    db: Session = Depends(get_db),
    current_user: Profile = Depends(get_reviewer),
):
    intern_ids = list(dict.fromkeys(channel_data.intern_ids))
    if intern_ids:
        found = db.query(Profile.id).filter(Profile.id.in_(intern_ids), Profile.role == "intern").count()
        if found != len(intern_ids):
            validation_error("intern_ids must reference existing interns", {"intern_ids": intern_ids})

    channel = Channel(
        name=channel_data.name.strip(),
        description=channel_data.description,
        intern_ids=intern_ids,
        created_by=current_user.id,
    )
    db.add(channel)
    db.commit()
    db.refresh(channel)
    api_logger.info("Channel created", channel_id=channel.id, members=len(intern_ids))
    return channel


@router.delete("/{channel_id}")
def delete_channel(
    channel_id: int,
    db: Session = Depends(get_db),
    current_user: Profile = Depends(get_reviewer),
):
    """Delete a channel (creator or admin)."""
    channel = db.query(Channel).filter(Channel.id == channel_id).first()
    if not channel:
        not_found("Channel", channel_id)
    if channel.created_by != current_user.id and current_user.role != "admin":
        forbidden("Only the creator or an admin can delete this channel")

    db.delete(channel)
    db.commit()
    return deleted("Channel deleted")


@router.get("/{channel_id}/messages", response_model=List[MessageResponse])
def list_messages(
    channel_id: int,
    limit: int = Query(default=50, ge=1, le=200),
    db: Session = Depends(get_db),
    current_user: Profile = Depends(get_required_user),
):
    """The latest messages of a channel, returned oldest first."""
    get_accessible_channel(db, channel_id, current_user)
    messages = (
        db.query(Message)
        .filter(Message.channel_id == channel_id)
        .order_by(Message.created_at.desc(), Message.id.desc())
        .limit(limit)
        .all()
    )
    return [message_to_dict(m) for m in reversed(messages)]


@router.post("/{channel_id}/messages", response_model=MessageResponse)
def post_message(
    channel_id: int,
    message_data: MessageCreate,
    db: Session = Depends(get_db),
    current_user: Profile = Depends(get_required_user),
):
    get_accessible_channel(db, channel_id, current_user)

    content = message_data.content.strip()
    if message_data.media_url:
        if not message_data.media_type:
            validation_error("media_type is required with media_url", {"field": "media_type"})
        # Media messages without a caption carry the URL as their content
        content = content or message_data.media_url
    elif not content:
        validation_error("content is required", {"field": "content"})

    message = Message(
        channel_id=channel_id,
        user_id=current_user.id,
        content=content,
        media_url=message_data.media_url,
        media_type=message_data.media_type if message_data.media_url else None,
    )
    db.add(message)
    db.commit()
    db.refresh(message)
    return message_to_dict(message)
