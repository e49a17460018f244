"""
Authentication service: registration, login, token validation and
password changes.

Login failures for an unknown email and for a wrong password raise the same
AuthenticationError so callers cannot tell which one occurred. Likewise every
token validation failure collapses into a single "Invalid token" error.
"""

import logging
from typing import Tuple

from sqlalchemy.orm import Session

from core.exceptions import AuthenticationError, ValidationError
from models import User, UserRole
from services.jwt_service import JWTService
from services.password_service import PasswordService
from services.user_service import UserService

logger = logging.getLogger(__name__)

INVALID_CREDENTIALS_MESSAGE = "Invalid credentials"
INVALID_TOKEN_MESSAGE = "Invalid token"

# Verified against when the email is unknown so both failure paths pay for a bcrypt check
_DUMMY_PASSWORD_HASH = PasswordService.hash_password("not-a-real-password")


class AuthService:
    """Service class for authentication operations."""

    def __init__(self, jwt_service: JWTService):
        self.jwt_service = jwt_service

    def register(
        self,
        db: Session,
        dni: str,
        name: str,
        email: str,
        password: str,
        role: UserRole
    ) -> Tuple[User, str]:
        """
        Create an account and issue a token for it.

        Raises:
            ValidationError: If the email or DNI is already in use
        """
        user = UserService.create(db, dni=dni, name=name, email=email, password=password, role=role)
        return user, self.jwt_service.issue_token(user)

    def authenticate(self, db: Session, email: str, password: str) -> Tuple[User, str]:
        """
        Verify credentials and issue a token.

        Raises:
            AuthenticationError: With the same message whether the email is
                unknown or the password is wrong
        """
        user = UserService.find_by_email(db, email)
        if not user:
            PasswordService.verify_password(password, _DUMMY_PASSWORD_HASH)
            logger.warning("Login rejected: invalid credentials")
            raise AuthenticationError(INVALID_CREDENTIALS_MESSAGE)

        if not PasswordService.verify_password(password, user.password):
            logger.warning("Login rejected: invalid credentials")
            raise AuthenticationError(INVALID_CREDENTIALS_MESSAGE)

        logger.info(f"User {user.id} logged in")
        return user, self.jwt_service.issue_token(user)

    def validate_token(self, db: Session, token: str) -> User:
        """
        Resolve a bearer token to its user.

        Raises:
            AuthenticationError: If the token is expired, malformed, tampered
                with, or refers to a user that no longer exists
        """
        payload = self.jwt_service.verify_token(token)
        if not payload:
            raise AuthenticationError(INVALID_TOKEN_MESSAGE)

        user = db.query(User).filter(User.id == payload.id).first()
        if not user:
            raise AuthenticationError(INVALID_TOKEN_MESSAGE)

        return user

    def change_password(
        self,
        db: Session,
        user_id: int,
        current_password: str,
        new_password: str
    ) -> None:
        """
        Replace a user's password after re-verifying the current one.

        Raises:
            NotFoundError: If the user does not exist
            ValidationError: If the current password does not verify
        """
        user = UserService.find_by_id(db, user_id)
        if not PasswordService.verify_password(current_password, user.password):
            raise ValidationError("Current password is incorrect")

        UserService.set_password(db, user, new_password)
        logger.info(f"User {user.id} changed password")
