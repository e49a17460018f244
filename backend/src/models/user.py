"""
User model for every actor of the system.

Administrators, doctors and patients all live in this single table and are
distinguished by their role. A doctor additionally has a Doctor profile row
linking them to a medical center and specialty.
"""

from enum import Enum
from datetime import datetime
from sqlalchemy import String, TIMESTAMP, Enum as SAEnum
from sqlalchemy.orm import Mapped, mapped_column, relationship

from core.database import Base
from core.constants import DNI_LENGTH, MAX_NAME_LENGTH, MAX_STRING_LENGTH


class UserRole(str, Enum):
    """Role of a user; the sole axis of the authorization policy."""

    ADMIN = "admin"
    DOCTOR = "doctor"
    PATIENT = "patient"


class User(Base):
    """Identity record with credentials and role."""

    __tablename__ = "users"

    id: Mapped[int] = mapped_column(primary_key=True, index=True)

    dni: Mapped[str] = mapped_column(String(DNI_LENGTH), unique=True)
    """National identification number (cédula), globally unique."""

    name: Mapped[str] = mapped_column(String(MAX_NAME_LENGTH))

    email: Mapped[str] = mapped_column(String(MAX_NAME_LENGTH), unique=True)  # Globally unique

    password: Mapped[str] = mapped_column(String(MAX_STRING_LENGTH))
    """bcrypt hash of the password. Plaintext is never stored."""

    role: Mapped[UserRole] = mapped_column(
        SAEnum(UserRole, name="user_role", native_enum=False, length=20,
               values_callable=lambda roles: [r.value for r in roles])
    )

    created_at: Mapped[datetime] = mapped_column(TIMESTAMP(timezone=True), nullable=False)

    # Relationships
    doctor_profile = relationship("Doctor", back_populates="user", uselist=False)
    """Doctor profile, present only for users with role=doctor."""

    appointments = relationship("Appointment", back_populates="patient")
    """Appointments booked by this user as a patient."""

    def __repr__(self) -> str:
        return f"<User(id={self.id}, email='{self.email}', role='{self.role}')>"
