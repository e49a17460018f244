"""
Doctor service for managing doctor profiles.

A doctor profile links a user whose role is doctor to one medical center and
one specialty. References are validated whenever they are written.
"""

import logging
from typing import Any, Dict, List, Optional

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session, joinedload

from core.exceptions import NotFoundError, ValidationError
from models import Doctor, User, UserRole, MedicalCenter, Specialty

logger = logging.getLogger(__name__)


def _doctor_query(db: Session):  # type: ignore[reportUnknownParameterType]
    """Base query loading the user, medical center and specialty with each doctor."""
    return db.query(Doctor).options(
        joinedload(Doctor.user),
        joinedload(Doctor.medical_center),
        joinedload(Doctor.specialty),
    )


class DoctorService:
    """Service class for doctor profile operations."""

    @staticmethod
    def find_all(db: Session) -> List[Doctor]:
        return _doctor_query(db).order_by(Doctor.id).all()

    @staticmethod
    def find_by_id(db: Session, doctor_id: int) -> Doctor:
        """
        Get a doctor by ID.

        Raises:
            NotFoundError: If the doctor does not exist
        """
        doctor = _doctor_query(db).filter(Doctor.id == doctor_id).first()
        if not doctor:
            raise NotFoundError("Doctor not found")
        return doctor

    @staticmethod
    def find_by_user_id(db: Session, user_id: int) -> Optional[Doctor]:
        return _doctor_query(db).filter(Doctor.user_id == user_id).first()

    @staticmethod
    def find_by_medical_center(db: Session, medical_center_id: int) -> List[Doctor]:
        return _doctor_query(db).filter(
            Doctor.medical_center_id == medical_center_id
        ).order_by(Doctor.id).all()

    @staticmethod
    def find_by_specialty(db: Session, specialty_id: int) -> List[Doctor]:
        return _doctor_query(db).filter(
            Doctor.specialty_id == specialty_id
        ).order_by(Doctor.id).all()

    @staticmethod
    def _validate_doctor_user(db: Session, user_id: int) -> User:
        user = db.query(User).filter(User.id == user_id).first()
        if not user:
            raise ValidationError("User not found")
        if user.role != UserRole.DOCTOR:
            raise ValidationError("User is not a doctor")
        return user

    @staticmethod
    def _validate_medical_center(db: Session, medical_center_id: int) -> MedicalCenter:
        center = db.query(MedicalCenter).filter(MedicalCenter.id == medical_center_id).first()
        if not center:
            raise NotFoundError("Medical center not found")
        return center

    @staticmethod
    def _validate_specialty(db: Session, specialty_id: int) -> Specialty:
        specialty = db.query(Specialty).filter(Specialty.id == specialty_id).first()
        if not specialty:
            raise NotFoundError("Specialty not found")
        return specialty

    @staticmethod
    def create(
        db: Session,
        user_id: int,
        medical_center_id: int,
        specialty_id: int
    ) -> Doctor:
        """
        Create a doctor profile.

        Validation order: user (exists, role=doctor), medical center,
        specialty, then one-profile-per-user.

        Raises:
            ValidationError: If the user is missing, is not a doctor, or already has a profile
            NotFoundError: If the medical center or specialty does not exist
        """
        DoctorService._validate_doctor_user(db, user_id)
        DoctorService._validate_medical_center(db, medical_center_id)
        DoctorService._validate_specialty(db, specialty_id)

        if db.query(Doctor).filter(Doctor.user_id == user_id).first():
            raise ValidationError("User already has a doctor profile")

        doctor = Doctor(
            user_id=user_id,
            medical_center_id=medical_center_id,
            specialty_id=specialty_id
        )
        db.add(doctor)
        try:
            db.commit()
        except IntegrityError:
            db.rollback()
            raise ValidationError("User already has a doctor profile")

        logger.info(
            f"Created doctor {doctor.id} for user {user_id} "
            f"(center={medical_center_id}, specialty={specialty_id})"
        )
        return DoctorService.find_by_id(db, doctor.id)

    @staticmethod
    def update(db: Session, doctor_id: int, doctor_data: Dict[str, Any]) -> Doctor:
        """
        Apply a partial update, re-validating any changed reference.

        Raises:
            NotFoundError: If the doctor, medical center or specialty does not exist
            ValidationError: If the new user is not a doctor or already has a profile
        """
        doctor = DoctorService.find_by_id(db, doctor_id)

        user_id = doctor_data.get("user_id")
        if user_id is not None and user_id != doctor.user_id:
            DoctorService._validate_doctor_user(db, user_id)
            if db.query(Doctor).filter(Doctor.user_id == user_id).first():
                raise ValidationError("User already has a doctor profile")
            doctor.user_id = user_id

        medical_center_id = doctor_data.get("medical_center_id")
        if medical_center_id is not None and medical_center_id != doctor.medical_center_id:
            DoctorService._validate_medical_center(db, medical_center_id)
            doctor.medical_center_id = medical_center_id

        specialty_id = doctor_data.get("specialty_id")
        if specialty_id is not None and specialty_id != doctor.specialty_id:
            DoctorService._validate_specialty(db, specialty_id)
            doctor.specialty_id = specialty_id

        try:
            db.commit()
        except IntegrityError:
            db.rollback()
            raise ValidationError("User already has a doctor profile")

        # Reload so relationships reflect the new foreign keys
        db.expire(doctor)
        return DoctorService.find_by_id(db, doctor_id)

    @staticmethod
    def delete(db: Session, doctor_id: int) -> None:
        """
        Hard-delete a doctor profile.

        Raises:
            NotFoundError: If no row was deleted
            ValidationError: If appointments still reference the doctor
        """
        try:
            deleted = db.query(Doctor).filter(Doctor.id == doctor_id).delete()
            if deleted == 0:
                raise NotFoundError("Doctor not found")
            db.commit()
        except IntegrityError:
            db.rollback()
            raise ValidationError("Doctor has appointments and cannot be deleted")
        logger.info(f"Deleted doctor {doctor_id}")
