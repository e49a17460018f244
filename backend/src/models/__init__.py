# Package initialization
# Import all models to ensure relationships are properly established
from .user import User, UserRole
from .medical_center import MedicalCenter, City
from .specialty import Specialty
from .doctor import Doctor
from .appointment import Appointment, AppointmentStatus

__all__ = [
    "User",
    "UserRole",
    "MedicalCenter",
    "City",
    "Specialty",
    "Doctor",
    "Appointment",
    "AppointmentStatus",
]
