"""
MedicalCenter model representing a physical facility where doctors practice.

Centers are normally soft-disabled through the active flag rather than deleted.
"""

from enum import Enum
from datetime import datetime
from sqlalchemy import String, Text, Boolean, TIMESTAMP, Enum as SAEnum
from sqlalchemy.orm import Mapped, mapped_column, relationship

from core.database import Base
from core.constants import MAX_NAME_LENGTH


class City(str, Enum):
    """Cities where medical centers are supported."""

    QUITO = "Quito"
    GUAYAQUIL = "Guayaquil"
    CUENCA = "Cuenca"


class MedicalCenter(Base):
    """A medical center (hospital or clinic)."""

    __tablename__ = "medical_centers"

    id: Mapped[int] = mapped_column(primary_key=True, index=True)
    name: Mapped[str] = mapped_column(String(MAX_NAME_LENGTH))
    address: Mapped[str] = mapped_column(Text)
    city: Mapped[City] = mapped_column(
        SAEnum(City, name="city", native_enum=False, length=20,
               values_callable=lambda cities: [c.value for c in cities])
    )
    active: Mapped[bool] = mapped_column(Boolean, default=True, nullable=False)
    created_at: Mapped[datetime] = mapped_column(TIMESTAMP(timezone=True), nullable=False)

    doctors = relationship("Doctor", back_populates="medical_center")

    def __repr__(self) -> str:
        return f"<MedicalCenter(id={self.id}, name='{self.name}', active={self.active})>"
