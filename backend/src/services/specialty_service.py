"""
Specialty service.

Specialty IDs are supplied by the caller; names are unique.
"""

import logging
from typing import Any, Dict, List, Optional

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from core.exceptions import NotFoundError, ValidationError
from models import Specialty

logger = logging.getLogger(__name__)


class SpecialtyService:
    """Service class for specialty operations."""

    @staticmethod
    def find_all(db: Session) -> List[Specialty]:
        return db.query(Specialty).order_by(Specialty.id).all()

    @staticmethod
    def find_by_id(db: Session, specialty_id: int) -> Specialty:
        """
        Get a specialty by ID.

        Raises:
            NotFoundError: If the specialty does not exist
        """
        specialty = db.query(Specialty).filter(Specialty.id == specialty_id).first()
        if not specialty:
            raise NotFoundError("Specialty not found")
        return specialty

    @staticmethod
    def find_by_name(db: Session, name: str) -> Optional[Specialty]:
        return db.query(Specialty).filter(Specialty.name == name).first()

    @staticmethod
    def create(
        db: Session,
        specialty_id: int,
        name: str,
        description: Optional[str] = None
    ) -> Specialty:
        """
        Create a specialty with a caller-supplied ID.

        Raises:
            ValidationError: If the ID or name is already taken
        """
        if db.get(Specialty, specialty_id) is not None:
            raise ValidationError("Specialty ID already in use")
        if SpecialtyService.find_by_name(db, name):
            raise ValidationError("Specialty name already in use")

        specialty = Specialty(id=specialty_id, name=name, description=description)
        db.add(specialty)
        try:
            db.commit()
        except IntegrityError:
            db.rollback()
            raise ValidationError("Specialty ID or name already in use")
        db.refresh(specialty)
        logger.info(f"Created specialty {specialty.id}")
        return specialty

    @staticmethod
    def update(db: Session, specialty_id: int, specialty_data: Dict[str, Any]) -> Specialty:
        """
        Update name and/or description.

        Raises:
            NotFoundError: If the specialty does not exist
            ValidationError: If the new name belongs to another specialty
        """
        specialty = SpecialtyService.find_by_id(db, specialty_id)

        new_name = specialty_data.get("name")
        if new_name and new_name != specialty.name:
            existing = SpecialtyService.find_by_name(db, new_name)
            if existing and existing.id != specialty.id:
                raise ValidationError("Specialty name already in use")
            specialty.name = new_name

        if "description" in specialty_data:
            specialty.description = specialty_data["description"]

        db.commit()
        db.refresh(specialty)
        return specialty

    @staticmethod
    def delete(db: Session, specialty_id: int) -> None:
        """
        Hard-delete a specialty.

        Raises:
            NotFoundError: If no row was deleted
            ValidationError: If doctors still reference the specialty
        """
        try:
            deleted = db.query(Specialty).filter(
                Specialty.id == specialty_id
            ).delete()
            if deleted == 0:
                raise NotFoundError("Specialty not found")
            db.commit()
        except IntegrityError:
            db.rollback()
            raise ValidationError("Specialty has doctors assigned and cannot be deleted")
        logger.info(f"Deleted specialty {specialty_id}")
