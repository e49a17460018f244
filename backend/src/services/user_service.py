"""
User service for account management.

Handles creation with email/DNI uniqueness checks, partial updates,
deletion, and role-filtered listings.
"""

import logging
from typing import Any, Dict, List, Optional

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from core.exceptions import NotFoundError, ValidationError
from models import User, UserRole
from services.password_service import PasswordService

logger = logging.getLogger(__name__)

_UPDATABLE_FIELDS = ("dni", "name", "email", "password", "role")


class UserService:
    """Service class for user operations."""

    @staticmethod
    def find_all(db: Session) -> List[User]:
        return db.query(User).order_by(User.id).all()

    @staticmethod
    def find_by_id(db: Session, user_id: int) -> User:
        """
        Get a user by ID.

        Raises:
            NotFoundError: If the user does not exist
        """
        user = db.query(User).filter(User.id == user_id).first()
        if not user:
            raise NotFoundError("User not found")
        return user

    @staticmethod
    def find_by_email(db: Session, email: str) -> Optional[User]:
        return db.query(User).filter(User.email == email).first()

    @staticmethod
    def find_by_dni(db: Session, dni: str) -> Optional[User]:
        return db.query(User).filter(User.dni == dni).first()

    @staticmethod
    def create(
        db: Session,
        dni: str,
        name: str,
        email: str,
        password: str,
        role: UserRole
    ) -> User:
        """
        Create a user after checking email and DNI uniqueness.

        The password is hashed before it reaches the database.

        Raises:
            ValidationError: If the email or DNI is already in use
        """
        if UserService.find_by_email(db, email):
            raise ValidationError("Email already in use")
        if UserService.find_by_dni(db, dni):
            raise ValidationError("DNI already in use")

        user = User(
            dni=dni,
            name=name,
            email=email,
            password=PasswordService.hash_password(password),
            role=role
        )
        db.add(user)
        try:
            db.commit()
        except IntegrityError:
            # Concurrent registration with the same email or DNI
            db.rollback()
            raise ValidationError("Email or DNI already in use")
        db.refresh(user)

        logger.info(f"Created user {user.id} with role {user.role.value}")
        return user

    @staticmethod
    def update(db: Session, user_id: int, user_data: Dict[str, Any]) -> User:
        """
        Apply a partial update to a user.

        A changed email or DNI is re-checked for uniqueness, and a new
        password is hashed. Unknown keys are ignored.

        Raises:
            NotFoundError: If the user does not exist
            ValidationError: If the new email or DNI belongs to another user
        """
        user = UserService.find_by_id(db, user_id)
        changes = {k: v for k, v in user_data.items() if k in _UPDATABLE_FIELDS and v is not None}

        new_email = changes.get("email")
        if new_email and new_email != user.email:
            existing = UserService.find_by_email(db, new_email)
            if existing and existing.id != user.id:
                raise ValidationError("Email already in use")

        new_dni = changes.get("dni")
        if new_dni and new_dni != user.dni:
            existing = UserService.find_by_dni(db, new_dni)
            if existing and existing.id != user.id:
                raise ValidationError("DNI already in use")

        if "password" in changes:
            changes["password"] = PasswordService.hash_password(changes["password"])

        for field, value in changes.items():
            setattr(user, field, value)

        try:
            db.commit()
        except IntegrityError:
            db.rollback()
            raise ValidationError("Email or DNI already in use")
        db.refresh(user)

        logger.info(f"Updated user {user.id} (fields: {sorted(changes)})")
        return user

    @staticmethod
    def set_password(db: Session, user: User, new_password: str) -> None:
        """Store a new password hash for a user."""
        user.password = PasswordService.hash_password(new_password)
        db.commit()

    @staticmethod
    def delete(db: Session, user_id: int) -> None:
        """
        Hard-delete a user.

        Raises:
            NotFoundError: If no row was deleted
            ValidationError: If the user is still referenced (doctor profile, appointments)
        """
        try:
            deleted = db.query(User).filter(User.id == user_id).delete()
            if deleted == 0:
                raise NotFoundError("User not found")
            db.commit()
        except IntegrityError:
            db.rollback()
            raise ValidationError("User is referenced by other records and cannot be deleted")
        logger.info(f"Deleted user {user_id}")

    @staticmethod
    def get_doctors(db: Session) -> List[User]:
        return db.query(User).filter(User.role == UserRole.DOCTOR).order_by(User.id).all()

    @staticmethod
    def get_patients(db: Session) -> List[User]:
        return db.query(User).filter(User.role == UserRole.PATIENT).order_by(User.id).all()
