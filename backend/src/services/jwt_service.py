"""
JWT Service for access token management.

Issues and validates the signed, time-limited bearer tokens that carry a
user's identity and role. There are no refresh tokens: once a token expires
the user must log in again.
"""

import jwt
from datetime import datetime, timedelta, timezone
from typing import Optional
from pydantic import BaseModel

from core.config import JWT_SECRET_KEY, JWT_ACCESS_TOKEN_EXPIRE_HOURS
from models import User, UserRole


class TokenPayload(BaseModel):
    """Payload structure for JWT tokens."""
    id: int  # Database user ID
    email: str
    role: UserRole
    iat: Optional[int] = None  # Set by JWT service
    exp: Optional[int] = None  # Set by JWT service


class JWTService:
    """Service for JWT token operations."""

    ALGORITHM = "HS256"

    def __init__(
        self,
        secret_key: str = JWT_SECRET_KEY,
        expire_hours: int = JWT_ACCESS_TOKEN_EXPIRE_HOURS
    ):
        if not secret_key:
            raise ValueError("JWT_SECRET_KEY environment variable must be set")
        self._secret_key = secret_key
        self.expire_hours = expire_hours

    def create_access_token(
        self,
        payload: TokenPayload,
        expires_delta: Optional[timedelta] = None
    ) -> str:
        """Create a JWT access token."""
        to_encode = payload.model_dump(mode="json", exclude={"iat", "exp"})
        now = datetime.now(timezone.utc)
        expire = now + (expires_delta if expires_delta is not None else timedelta(hours=self.expire_hours))
        to_encode.update({"exp": expire, "iat": now})
        return jwt.encode(to_encode, self._secret_key, algorithm=self.ALGORITHM)

    def issue_token(self, user: User) -> str:
        """Create an access token for a user."""
        return self.create_access_token(
            TokenPayload(id=user.id, email=user.email, role=user.role)
        )

    def verify_token(self, token: str) -> Optional[TokenPayload]:
        """Verify and decode a JWT token. Returns None for any invalid token."""
        try:
            payload = jwt.decode(
                token,
                self._secret_key,
                algorithms=[self.ALGORITHM],
                options={"require": ["exp", "iat"]},
            )
            return TokenPayload(**payload)
        except jwt.ExpiredSignatureError:
            return None
        except jwt.InvalidTokenError:
            return None
        except ValueError:
            # Signed with our key but missing/invalid claims
            return None

    def get_token_expiry(self) -> datetime:
        """Get expiry datetime for a token issued now."""
        return datetime.now(timezone.utc) + timedelta(hours=self.expire_hours)


def get_jwt_service() -> JWTService:
    """FastAPI dependency providing the token service built from configuration."""
    return JWTService()
