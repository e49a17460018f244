"""
Services package for shared business logic.

This package contains service classes that encapsulate business logic
shared across multiple API endpoints.
"""

from .password_service import PasswordService
from .jwt_service import JWTService, TokenPayload, get_jwt_service
from .user_service import UserService
from .auth_service import AuthService
from .medical_center_service import MedicalCenterService
from .specialty_service import SpecialtyService
from .doctor_service import DoctorService
from .appointment_service import AppointmentService

__all__ = [
    "PasswordService",
    "JWTService",
    "TokenPayload",
    "get_jwt_service",
    "UserService",
    "AuthService",
    "MedicalCenterService",
    "SpecialtyService",
    "DoctorService",
    "AppointmentService",
]
