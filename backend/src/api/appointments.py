# pyright: reportMissingTypeStubs=false
"""
Appointment API endpoints.

Every endpoint requires authentication; any role may read, book, change the
status of, or delete any appointment by ID. No ownership check is applied.
"""

import logging
from datetime import date, time
from fastapi import APIRouter, Depends, status
from pydantic import field_validator
from sqlalchemy.orm import Session

from core.database import get_db
from core.exceptions import ValidationError
from auth.permissions import require_permission
from api.responses import ApiResponse, AppointmentResponse, CamelModel, appointments_to_response
from api.shared import coerce_date, coerce_time
from models import AppointmentStatus, User
from services.appointment_service import AppointmentService
from utils.datetime_utils import parse_date_string

logger = logging.getLogger(__name__)

router = APIRouter()


# ===== Request Models =====

class AppointmentCreateRequest(CamelModel):
    """Request model for booking an appointment."""
    patient_id: int
    doctor_id: int
    appointment_date: date
    appointment_time: time

    @field_validator('appointment_date', mode='before')
    @classmethod
    def _parse_date(cls, v: object) -> object:
        return coerce_date(v)

    @field_validator('appointment_time', mode='before')
    @classmethod
    def _parse_time(cls, v: object) -> object:
        return coerce_time(v)


class AppointmentStatusUpdateRequest(CamelModel):
    """Request model for changing an appointment's status."""
    status: AppointmentStatus


# ===== API Endpoints =====

@router.get("", summary="List all appointments")
async def list_appointments(
    current_user: User = Depends(require_permission("appointment", "read")),
    db: Session = Depends(get_db)
) -> ApiResponse:
    appointments = AppointmentService.find_all(db)
    return ApiResponse.ok("Appointments retrieved successfully", appointments_to_response(appointments))


@router.get("/patient/{patient_id}", summary="List a patient's appointments")
async def list_appointments_by_patient(
    patient_id: int,
    current_user: User = Depends(require_permission("appointment", "read")),
    db: Session = Depends(get_db)
) -> ApiResponse:
    appointments = AppointmentService.find_by_patient(db, patient_id)
    return ApiResponse.ok("Appointments retrieved successfully", appointments_to_response(appointments))


@router.get("/doctor/{doctor_id}", summary="List a doctor's appointments")
async def list_appointments_by_doctor(
    doctor_id: int,
    current_user: User = Depends(require_permission("appointment", "read")),
    db: Session = Depends(get_db)
) -> ApiResponse:
    appointments = AppointmentService.find_by_doctor(db, doctor_id)
    return ApiResponse.ok("Appointments retrieved successfully", appointments_to_response(appointments))


@router.get("/date/{appointment_date}", summary="List appointments on a date")
async def list_appointments_by_date(
    appointment_date: str,
    current_user: User = Depends(require_permission("appointment", "read")),
    db: Session = Depends(get_db)
) -> ApiResponse:
    """List appointments on a date given as YYYY-MM-DD."""
    try:
        parsed_date = parse_date_string(appointment_date)
    except ValueError as e:
        raise ValidationError(str(e))
    appointments = AppointmentService.find_by_date(db, parsed_date)
    return ApiResponse.ok("Appointments retrieved successfully", appointments_to_response(appointments))


@router.get("/{appointment_id}", summary="Get an appointment by ID")
async def get_appointment(
    appointment_id: int,
    current_user: User = Depends(require_permission("appointment", "read")),
    db: Session = Depends(get_db)
) -> ApiResponse:
    appointment = AppointmentService.find_by_id(db, appointment_id)
    return ApiResponse.ok("Appointment retrieved successfully", AppointmentResponse.model_validate(appointment))


@router.post("", summary="Book an appointment", status_code=status.HTTP_201_CREATED)
async def create_appointment(
    request: AppointmentCreateRequest,
    current_user: User = Depends(require_permission("appointment", "write")),
    db: Session = Depends(get_db)
) -> ApiResponse:
    """
    Book a (doctor, date, time) slot.

    Returns 400 if any appointment, whatever its status, already holds the slot.
    """
    appointment = AppointmentService.create(
        db,
        patient_id=request.patient_id,
        doctor_id=request.doctor_id,
        appointment_date=request.appointment_date,
        appointment_time=request.appointment_time
    )
    return ApiResponse.ok("Appointment created successfully", AppointmentResponse.model_validate(appointment))


@router.patch("/{appointment_id}/status", summary="Change an appointment's status")
async def update_appointment_status(
    appointment_id: int,
    request: AppointmentStatusUpdateRequest,
    current_user: User = Depends(require_permission("appointment", "write")),
    db: Session = Depends(get_db)
) -> ApiResponse:
    appointment = AppointmentService.update_status(db, appointment_id, request.status)
    return ApiResponse.ok("Appointment status updated successfully", AppointmentResponse.model_validate(appointment))


@router.delete("/{appointment_id}", summary="Delete an appointment")
async def delete_appointment(
    appointment_id: int,
    current_user: User = Depends(require_permission("appointment", "delete")),
    db: Session = Depends(get_db)
) -> ApiResponse:
    AppointmentService.delete(db, appointment_id)
    return ApiResponse.ok("Appointment deleted successfully")
