"""
Authentication utilities for JWT tokens, password hashing and role checks.
"""
from datetime import datetime, timedelta, timezone
from typing import Optional, Tuple
from jose import JWTError, jwt
from passlib.context import CryptContext
from fastapi import Depends, HTTPException, status
from fastapi.security import OAuth2PasswordBearer
from sqlalchemy.orm import Session

from .database import get_db
from .models.profile import Profile
from .config import get_settings

settings = get_settings()

pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")
oauth2_scheme = OAuth2PasswordBearer(tokenUrl="/api/auth/login", auto_error=False)

REVIEWER_ROLES = ("staff", "admin")


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """Verify a password against its hash."""
    return pwd_context.verify(plain_password, hashed_password)


def get_password_hash(password: str) -> str:
    """Hash a password for storage."""
    return pwd_context.hash(password)


def create_access_token(data: dict, expires_delta: Optional[timedelta] = None) -> str:
    """Create a JWT access token."""
    to_encode = data.copy()
    if expires_delta:
        expire = datetime.now(timezone.utc) + expires_delta
    else:
        expire = datetime.now(timezone.utc) + timedelta(minutes=settings.access_token_expire_minutes)
    to_encode.update({"exp": expire, "type": "access"})
    return jwt.encode(to_encode, settings.secret_key, algorithm=settings.algorithm)


def create_refresh_token(data: dict) -> str:
    """Create a JWT refresh token with longer expiration."""
    to_encode = data.copy()
    expire = datetime.now(timezone.utc) + timedelta(days=settings.refresh_token_expire_days)
    to_encode.update({"exp": expire, "type": "refresh"})
    return jwt.encode(to_encode, settings.secret_key, algorithm=settings.algorithm)


def create_tokens(profile_id: int) -> Tuple[str, str]:
    """Create both access and refresh tokens for a profile."""
    data = {"sub": str(profile_id)}  # JWT sub claim must be a string
    return create_access_token(data), create_refresh_token(data)


def verify_token(token: str, expected_type: str = "access") -> Optional[dict]:
    """Verify a JWT token and return its payload."""
    try:
        payload = jwt.decode(token, settings.secret_key, algorithms=[settings.algorithm])
        if payload.get("type", "access") != expected_type:
            return None
        return payload
    except JWTError:
        return None


def _profile_id_from(payload: Optional[dict]) -> Optional[int]:
    if not payload:
        return None
    try:
        return int(payload.get("sub"))
    except (ValueError, TypeError):
        return None


def get_current_user(
    token: Optional[str] = Depends(oauth2_scheme),
    db: Session = Depends(get_db)
) -> Optional[Profile]:
    """Get the current profile from the JWT token (optional auth)."""
    if not token:
        return None

    profile_id = _profile_id_from(verify_token(token, "access"))
    if profile_id is None:
        return None

    return db.query(Profile).filter(Profile.id == profile_id).first()


def get_required_user(
    current_user: Optional[Profile] = Depends(get_current_user)
) -> Profile:
    """Get the current profile, raising 401 if not authenticated."""
    if not current_user or not current_user.is_active:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Not authenticated",
            headers={"WWW-Authenticate": "Bearer"},
        )
    return current_user


def require_roles(*roles: str):
    """Dependency factory restricting a route to the given roles."""
    def checker(current_user: Profile = Depends(get_required_user)) -> Profile:
        if current_user.role not in roles:
            raise HTTPException(
                status_code=status.HTTP_403_FORBIDDEN,
                detail=f"Requires role: {', '.join(roles)}",
            )
        return current_user
    return checker


get_reviewer = require_roles(*REVIEWER_ROLES)
get_admin = require_roles("admin")


def refresh_access_token(refresh_token: str, db: Session) -> Optional[Tuple[str, str]]:
    """Use a refresh token to get new access and refresh tokens."""
    profile_id = _profile_id_from(verify_token(refresh_token, "refresh"))
    if profile_id is None:
        return None

    # Verify profile still exists and is active
    profile = db.query(Profile).filter(Profile.id == profile_id).first()
    if not profile or not profile.is_active:
        return None

    return create_tokens(profile_id)
