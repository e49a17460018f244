"""
Appointment model: a patient booking with a doctor for a date and time.

A slot is the (doctor, date, time) triple and is treated as instantaneous;
appointments carry no duration. The unique constraint on the triple backs the
availability check in AppointmentService so that two concurrent bookings for
the same slot cannot both be inserted.
"""

from enum import Enum
from datetime import date, datetime, time
from sqlalchemy import ForeignKey, Index, TIMESTAMP, Date, Time, UniqueConstraint, Enum as SAEnum
from sqlalchemy.orm import Mapped, mapped_column, relationship

from core.database import Base


class AppointmentStatus(str, Enum):
    """
    Appointment lifecycle status.

    pending is the initial state; completed and cancelled are terminal by
    convention, but no transition table is enforced.
    """

    PENDING = "pending"
    COMPLETED = "completed"
    CANCELLED = "cancelled"


class Appointment(Base):
    """A booked appointment."""

    __tablename__ = "appointments"

    id: Mapped[int] = mapped_column(primary_key=True, index=True)

    patient_id: Mapped[int] = mapped_column(ForeignKey("users.id"))
    """User who booked the appointment."""

    doctor_id: Mapped[int] = mapped_column(ForeignKey("doctors.id"))
    """Doctor profile (not user) the appointment is with."""

    appointment_date: Mapped[date] = mapped_column(Date)
    appointment_time: Mapped[time] = mapped_column(Time)

    status: Mapped[AppointmentStatus] = mapped_column(
        SAEnum(AppointmentStatus, name="appointment_status", native_enum=False, length=20,
               values_callable=lambda statuses: [s.value for s in statuses]),
        default=AppointmentStatus.PENDING,
        nullable=False,
    )

    created_at: Mapped[datetime] = mapped_column(TIMESTAMP(timezone=True), nullable=False)

    # Relationships
    patient = relationship("User", back_populates="appointments")
    doctor = relationship("Doctor", back_populates="appointments")

    __table_args__ = (
        Index("idx_patient", "patient_id"),
        Index("idx_doctor_date", "doctor_id", "appointment_date"),
        UniqueConstraint("doctor_id", "appointment_date", "appointment_time", name="uq_doctor_appointment_slot"),
    )

    def __repr__(self) -> str:
        return (
            f"<Appointment(id={self.id}, doctor_id={self.doctor_id}, "
            f"date={self.appointment_date}, time={self.appointment_time}, status='{self.status}')>"
        )
