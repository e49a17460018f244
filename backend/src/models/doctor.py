"""
Doctor model: the role extension of a User with role=doctor.

Each doctor works at exactly one medical center and practices exactly one
specialty. The references are validated by DoctorService at write time only;
nothing reconciles a doctor whose center or specialty is removed later.
"""

from datetime import datetime
from sqlalchemy import ForeignKey, TIMESTAMP
from sqlalchemy.orm import Mapped, mapped_column, relationship

from core.database import Base


class Doctor(Base):
    """Doctor profile linking a user to a medical center and specialty."""

    __tablename__ = "doctors"

    id: Mapped[int] = mapped_column(primary_key=True, index=True)

    user_id: Mapped[int] = mapped_column(ForeignKey("users.id"), unique=True)
    """One doctor profile per user."""

    medical_center_id: Mapped[int] = mapped_column(ForeignKey("medical_centers.id"))
    specialty_id: Mapped[int] = mapped_column(ForeignKey("specialties.id"))
    created_at: Mapped[datetime] = mapped_column(TIMESTAMP(timezone=True), nullable=False)

    # Relationships
    user = relationship("User", back_populates="doctor_profile")
    medical_center = relationship("MedicalCenter", back_populates="doctors")
    specialty = relationship("Specialty", back_populates="doctors")
    appointments = relationship("Appointment", back_populates="doctor")

    def __repr__(self) -> str:
        return f"<Doctor(id={self.id}, user_id={self.user_id})>"
