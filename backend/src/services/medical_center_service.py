"""
Medical center service.

Centers carry no cross-entity validation; they are toggled active/inactive
in normal operation and only hard-deleted by administrators.
"""

import logging
from typing import Any, Dict, List

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from core.exceptions import NotFoundError, ValidationError
from models import MedicalCenter, City

logger = logging.getLogger(__name__)

_UPDATABLE_FIELDS = ("name", "address", "city", "active")


class MedicalCenterService:
    """Service class for medical center operations."""

    @staticmethod
    def find_all(db: Session) -> List[MedicalCenter]:
        return db.query(MedicalCenter).order_by(MedicalCenter.id).all()

    @staticmethod
    def find_by_id(db: Session, center_id: int) -> MedicalCenter:
        """
        Get a medical center by ID.

        Raises:
            NotFoundError: If the center does not exist
        """
        center = db.query(MedicalCenter).filter(MedicalCenter.id == center_id).first()
        if not center:
            raise NotFoundError("Medical center not found")
        return center

    @staticmethod
    def find_by_city(db: Session, city: City) -> List[MedicalCenter]:
        return db.query(MedicalCenter).filter(
            MedicalCenter.city == city
        ).order_by(MedicalCenter.id).all()

    @staticmethod
    def create(
        db: Session,
        name: str,
        address: str,
        city: City,
        active: bool = True
    ) -> MedicalCenter:
        center = MedicalCenter(name=name, address=address, city=city, active=active)
        db.add(center)
        db.commit()
        db.refresh(center)
        logger.info(f"Created medical center {center.id} ({center.city.value})")
        return center

    @staticmethod
    def update(db: Session, center_id: int, center_data: Dict[str, Any]) -> MedicalCenter:
        """Apply a partial update. Raises NotFoundError if the center does not exist."""
        center = MedicalCenterService.find_by_id(db, center_id)
        for field, value in center_data.items():
            if field in _UPDATABLE_FIELDS and value is not None:
                setattr(center, field, value)
        db.commit()
        db.refresh(center)
        return center

    @staticmethod
    def toggle_status(db: Session, center_id: int) -> MedicalCenter:
        """
        Invert the active flag of a medical center.

        Each call flips the state, so two calls restore the original value.
        """
        center = MedicalCenterService.find_by_id(db, center_id)
        center.active = not center.active
        db.commit()
        db.refresh(center)
        logger.info(f"Medical center {center.id} active={center.active}")
        return center

    @staticmethod
    def delete(db: Session, center_id: int) -> None:
        """
        Hard-delete a medical center.

        Raises:
            NotFoundError: If no row was deleted
            ValidationError: If doctors still reference the center
        """
        try:
            deleted = db.query(MedicalCenter).filter(
                MedicalCenter.id == center_id
            ).delete()
            if deleted == 0:
                raise NotFoundError("Medical center not found")
            db.commit()
        except IntegrityError:
            db.rollback()
            raise ValidationError("Medical center has doctors assigned and cannot be deleted")
        logger.info(f"Deleted medical center {center_id}")
