"""
Appointment service: the booking engine.

This module owns slot conflict detection, appointment creation, status
updates and deletion. A slot is the exact (doctor, date, time) triple;
appointments have no duration, so only exact matches conflict.
"""

import logging
from datetime import date, time
from typing import List

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from core.exceptions import ConflictError, NotFoundError
from models import Appointment, AppointmentStatus, Doctor, User

logger = logging.getLogger(__name__)


class AppointmentService:
    """
    Service class for appointment operations.

    Status transitions are deliberately permissive: pending is the initial
    state and completed/cancelled are terminal by convention, but any
    authorized caller may write any status.
    """

    @staticmethod
    def find_all(db: Session) -> List[Appointment]:
        return db.query(Appointment).order_by(
            Appointment.appointment_date, Appointment.appointment_time, Appointment.id
        ).all()

    @staticmethod
    def find_by_id(db: Session, appointment_id: int) -> Appointment:
        """
        Get an appointment by ID.

        Raises:
            NotFoundError: If the appointment does not exist
        """
        appointment = db.query(Appointment).filter(Appointment.id == appointment_id).first()
        if not appointment:
            raise NotFoundError("Appointment not found")
        return appointment

    @staticmethod
    def find_by_patient(db: Session, patient_id: int) -> List[Appointment]:
        return db.query(Appointment).filter(
            Appointment.patient_id == patient_id
        ).order_by(Appointment.appointment_date, Appointment.appointment_time, Appointment.id).all()

    @staticmethod
    def find_by_doctor(db: Session, doctor_id: int) -> List[Appointment]:
        return db.query(Appointment).filter(
            Appointment.doctor_id == doctor_id
        ).order_by(Appointment.appointment_date, Appointment.appointment_time, Appointment.id).all()

    @staticmethod
    def find_by_date(db: Session, appointment_date: date) -> List[Appointment]:
        return db.query(Appointment).filter(
            Appointment.appointment_date == appointment_date
        ).order_by(Appointment.appointment_time, Appointment.id).all()

    @staticmethod
    def is_slot_taken(
        db: Session,
        doctor_id: int,
        appointment_date: date,
        appointment_time: time
    ) -> bool:
        """
        Check whether any appointment already occupies the exact slot.

        Every status counts, including cancelled: a cancelled booking still
        blocks its slot from being booked again.
        """
        return db.query(Appointment.id).filter(
            Appointment.doctor_id == doctor_id,
            Appointment.appointment_date == appointment_date,
            Appointment.appointment_time == appointment_time
        ).first() is not None

    @staticmethod
    def create(
        db: Session,
        patient_id: int,
        doctor_id: int,
        appointment_date: date,
        appointment_time: time
    ) -> Appointment:
        """
        Book an appointment.

        Args:
            db: Database session
            patient_id: User ID of the patient
            doctor_id: Doctor profile ID
            appointment_date: Calendar date of the appointment
            appointment_time: Time of day (second precision)

        Returns:
            The created appointment with status=pending

        Raises:
            NotFoundError: If the patient or doctor does not exist
            ConflictError: If any appointment (of any status) already holds the slot
        """
        if db.query(User.id).filter(User.id == patient_id).first() is None:
            raise NotFoundError("Patient not found")
        if db.query(Doctor.id).filter(Doctor.id == doctor_id).first() is None:
            raise NotFoundError("Doctor not found")

        if AppointmentService.is_slot_taken(db, doctor_id, appointment_date, appointment_time):
            logger.warning(
                f"Slot conflict for doctor {doctor_id} on {appointment_date} at {appointment_time}"
            )
            raise ConflictError("Doctor is not available at that time")

        appointment = Appointment(
            patient_id=patient_id,
            doctor_id=doctor_id,
            appointment_date=appointment_date,
            appointment_time=appointment_time,
            status=AppointmentStatus.PENDING
        )
        db.add(appointment)
        try:
            db.commit()
        except IntegrityError:
            # A concurrent booking took the slot between the check and the insert;
            # uq_doctor_appointment_slot rejected ours
            db.rollback()
            logger.warning(
                f"Slot conflict on insert for doctor {doctor_id} on {appointment_date} at {appointment_time}"
            )
            raise ConflictError("Doctor is not available at that time")
        db.refresh(appointment)

        logger.info(
            f"Created appointment {appointment.id} for patient {patient_id} "
            f"with doctor {doctor_id} on {appointment_date} at {appointment_time}"
        )
        return appointment

    @staticmethod
    def update_status(
        db: Session,
        appointment_id: int,
        status: AppointmentStatus
    ) -> Appointment:
        """
        Overwrite an appointment's status.

        No transition table is enforced; completed -> pending is accepted.

        Raises:
            NotFoundError: If the appointment does not exist
        """
        appointment = AppointmentService.find_by_id(db, appointment_id)
        previous = appointment.status
        appointment.status = status
        db.commit()
        db.refresh(appointment)

        logger.info(f"Appointment {appointment_id} status {previous.value} -> {appointment.status.value}")
        return appointment

    @staticmethod
    def delete(db: Session, appointment_id: int) -> None:
        """
        Hard-delete an appointment.

        Raises:
            NotFoundError: If no row was deleted
        """
        deleted = db.query(Appointment).filter(Appointment.id == appointment_id).delete()
        if deleted == 0:
            raise NotFoundError("Appointment not found")
        db.commit()
        logger.info(f"Deleted appointment {appointment_id}")
