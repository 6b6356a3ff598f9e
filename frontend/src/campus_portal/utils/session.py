"""
Session Cookie Utilities
The browser session is a signed, expiring JWT carrying the API token and a
snapshot of the signed-in user
"""

import logging
from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Optional

from fastapi import Response
from jose import JWTError, jwt

from campus_portal.config import settings
from campus_portal.schemas.user import User, UserRole

logger = logging.getLogger(__name__)


@dataclass
class PortalSession:
    """Signed-in user as carried by the session cookie"""

    token: str
    user_id: int
    name: str
    email: str
    role: UserRole

    @property
    def is_admin(self) -> bool:
        return self.role == UserRole.ADMIN

    @property
    def first_name(self) -> str:
        return self.name.split(" ")[0] if self.name else "there"

    @property
    def home(self) -> str:
        """Landing page for this user's role"""
        return "/admin" if self.is_admin else "/dashboard"

    @classmethod
    def from_user(cls, token: str, user: User) -> "PortalSession":
        return cls(token=token, user_id=user.id, name=user.name, email=user.email, role=user.role)


def encode_session(session: PortalSession, expires_delta: Optional[timedelta] = None) -> str:
    """
    Create the signed session value

    Args:
        session: Session to store
        expires_delta: Lifetime, defaults to SESSION_EXPIRE_MINUTES

    Returns:
        Encoded JWT
    """
    expire = datetime.utcnow() + (expires_delta or timedelta(minutes=settings.SESSION_EXPIRE_MINUTES))
    to_encode = {
        "sub": str(session.user_id),
        "tok": session.token,
        "name": session.name,
        "email": session.email,
        "role": session.role.value,
        "exp": expire,
    }
    return jwt.encode(to_encode, settings.SECRET_KEY, algorithm=settings.ALGORITHM)


def decode_session(value: Optional[str]) -> Optional[PortalSession]:
    """Decode a session value; tampered, expired or malformed values give None"""
    if not value:
        return None

    try:
        payload = jwt.decode(value, settings.SECRET_KEY, algorithms=[settings.ALGORITHM])
        return PortalSession(
            token=payload["tok"],
            user_id=int(payload["sub"]),
            name=payload.get("name", ""),
            email=payload.get("email", ""),
            role=UserRole(payload["role"]),
        )
    except JWTError as e:
        logger.info(f"Rejected session cookie: {str(e)}")
        return None
    except (KeyError, ValueError) as e:
        logger.info(f"Malformed session cookie: {str(e)}")
        return None


def set_session_cookie(response: Response, session: PortalSession) -> None:
    response.set_cookie(
        settings.SESSION_COOKIE_NAME,
        encode_session(session),
        max_age=settings.SESSION_EXPIRE_MINUTES * 60,
        httponly=True,
        samesite="lax",
        secure=settings.SESSION_COOKIE_SECURE,
    )


def clear_session_cookie(response: Response) -> None:
    response.delete_cookie(settings.SESSION_COOKIE_NAME)
