# pyright: reportMissingTypeStubs=false
"""
Authentication dependencies for FastAPI.

Resolves the bearer token on a request to the authenticated User.
Role checks live in auth.permissions.
"""

import logging
from typing import Optional
from fastapi import Depends
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from sqlalchemy.orm import Session

from core.database import get_db
from core.exceptions import AuthenticationError
from services.auth_service import AuthService
from services.jwt_service import JWTService, get_jwt_service
from models import User

logger = logging.getLogger(__name__)


# HTTP Bearer token security scheme
security = HTTPBearer(auto_error=False)


def get_auth_service(jwt_service: JWTService = Depends(get_jwt_service)) -> AuthService:
    """Build the authentication service for a request."""
    return AuthService(jwt_service)


def get_current_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
    db: Session = Depends(get_db),
    auth_service: AuthService = Depends(get_auth_service)
) -> User:
    """Get the authenticated user from the bearer token."""
    if not credentials:
        raise AuthenticationError("Authentication token is required")

    return auth_service.validate_token(db, credentials.credentials)
