"""
Specialty model (cardiology, pediatrics, ...).

Unlike other tables the primary key is supplied by the caller.
"""

from typing import Optional
from sqlalchemy import String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from core.database import Base
from core.constants import MAX_NAME_LENGTH


class Specialty(Base):
    """Medical specialty a doctor practices."""

    __tablename__ = "specialties"

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=False)
    name: Mapped[str] = mapped_column(String(MAX_NAME_LENGTH), unique=True)
    description: Mapped[Optional[str]] = mapped_column(Text, nullable=True)

    doctors = relationship("Doctor", back_populates="specialty")

    def __repr__(self) -> str:
        return f"<Specialty(id={self.id}, name='{self.name}')>"
