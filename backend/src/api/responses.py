"""
Shared response models for API endpoints.

Every endpoint answers with the ApiResponse envelope {success, message, data}.
Entity models serialize with camelCase field names (patientId, createdAt, ...)
and accept either camelCase or snake_case on input.
"""

from datetime import datetime, date, time
from typing import Any, List, Optional

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

from models import UserRole, City, AppointmentStatus


class CamelModel(BaseModel):
    """Base model using camelCase aliases on the wire."""
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


def _to_json(data: Any) -> Any:
    if isinstance(data, BaseModel):
        return data.model_dump(mode="json", by_alias=True)
    if isinstance(data, (list, tuple)):
        return [_to_json(item) for item in data]  # type: ignore[reportUnknownVariableType]
    if isinstance(data, dict):
        return {key: _to_json(value) for key, value in data.items()}  # type: ignore[reportUnknownVariableType]
    return data


class ApiResponse(BaseModel):
    """Response envelope shared by every endpoint."""
    success: bool
    message: str
    data: Optional[Any] = None

    @classmethod
    def ok(cls, message: str, data: Any = None) -> "ApiResponse":
        """Successful response; pydantic models in data are dumped with camelCase keys."""
        return cls(success=True, message=message, data=_to_json(data))

    @classmethod
    def error(cls, message: str, data: Any = None) -> "ApiResponse":
        """Failed response."""
        return cls(success=False, message=message, data=_to_json(data))


class UserResponse(CamelModel):
    """Response model for user information. The password hash is never included."""
    id: int
    dni: str
    name: str
    email: str
    role: UserRole
    created_at: datetime


class AuthResponse(CamelModel):
    """Response model for register/login."""
    user: UserResponse
    token: str


class MedicalCenterResponse(CamelModel):
    """Response model for medical center information."""
    id: int
    name: str
    address: str
    city: City
    active: bool
    created_at: datetime


class SpecialtyResponse(CamelModel):
    """Response model for specialty information."""
    id: int
    name: str
    description: Optional[str] = None


class DoctorResponse(CamelModel):
    """Response model for a doctor profile with its user, center and specialty."""
    id: int
    user_id: int
    medical_center_id: int
    specialty_id: int
    created_at: datetime
    user: Optional[UserResponse] = None
    medical_center: Optional[MedicalCenterResponse] = None
    specialty: Optional[SpecialtyResponse] = None


class AppointmentResponse(CamelModel):
    """Response model for appointment information."""
    id: int
    patient_id: int
    doctor_id: int
    appointment_date: date
    appointment_time: time
    status: AppointmentStatus
    created_at: datetime


def users_to_response(users: List[Any]) -> List[UserResponse]:
    return [UserResponse.model_validate(u) for u in users]


def doctors_to_response(doctors: List[Any]) -> List[DoctorResponse]:
    return [DoctorResponse.model_validate(d) for d in doctors]


def appointments_to_response(appointments: List[Any]) -> List[AppointmentResponse]:
    return [AppointmentResponse.model_validate(a) for a in appointments]
