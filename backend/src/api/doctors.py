# pyright: reportMissingTypeStubs=false
"""
Doctor API endpoints.

Reads are public; writes require the admin role. Doctor responses embed the
linked user, medical center and specialty.
"""

import logging
from typing import Optional
from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from core.database import get_db
from auth.permissions import require_permission
from api.responses import ApiResponse, CamelModel, DoctorResponse, doctors_to_response
from models import User
from services.doctor_service import DoctorService

logger = logging.getLogger(__name__)

router = APIRouter()


class DoctorCreateRequest(CamelModel):
    """Request model for creating a doctor profile."""
    user_id: int
    medical_center_id: int
    specialty_id: int


class DoctorUpdateRequest(CamelModel):
    """Request model for updating a doctor profile."""
    user_id: Optional[int] = None
    medical_center_id: Optional[int] = None
    specialty_id: Optional[int] = None


@router.get("", summary="List all doctors")
async def list_doctors(db: Session = Depends(get_db)) -> ApiResponse:
    doctors = DoctorService.find_all(db)
    return ApiResponse.ok("Doctors retrieved successfully", doctors_to_response(doctors))


@router.get("/medical-center/{medical_center_id}", summary="List doctors at a medical center")
async def list_doctors_by_medical_center(medical_center_id: int, db: Session = Depends(get_db)) -> ApiResponse:
    doctors = DoctorService.find_by_medical_center(db, medical_center_id)
    return ApiResponse.ok("Doctors retrieved successfully", doctors_to_response(doctors))


@router.get("/specialty/{specialty_id}", summary="List doctors with a specialty")
async def list_doctors_by_specialty(specialty_id: int, db: Session = Depends(get_db)) -> ApiResponse:
    doctors = DoctorService.find_by_specialty(db, specialty_id)
    return ApiResponse.ok("Doctors retrieved successfully", doctors_to_response(doctors))


@router.get("/{doctor_id}", summary="Get a doctor by ID")
async def get_doctor(doctor_id: int, db: Session = Depends(get_db)) -> ApiResponse:
    doctor = DoctorService.find_by_id(db, doctor_id)
    return ApiResponse.ok("Doctor retrieved successfully", DoctorResponse.model_validate(doctor))


@router.post("", summary="Create a doctor profile", status_code=status.HTTP_201_CREATED)
async def create_doctor(
    request: DoctorCreateRequest,
    current_user: User = Depends(require_permission("doctor", "write")),
    db: Session = Depends(get_db)
) -> ApiResponse:
    doctor = DoctorService.create(
        db,
        user_id=request.user_id,
        medical_center_id=request.medical_center_id,
        specialty_id=request.specialty_id
    )
    return ApiResponse.ok("Doctor created successfully", DoctorResponse.model_validate(doctor))


@router.put("/{doctor_id}", summary="Update a doctor profile")
async def update_doctor(
    doctor_id: int,
    request: DoctorUpdateRequest,
    current_user: User = Depends(require_permission("doctor", "write")),
    db: Session = Depends(get_db)
) -> ApiResponse:
    doctor = DoctorService.update(db, doctor_id, request.model_dump(exclude_unset=True))
    return ApiResponse.ok("Doctor updated successfully", DoctorResponse.model_validate(doctor))


@router.delete("/{doctor_id}", summary="Delete a doctor profile")
async def delete_doctor(
    doctor_id: int,
    current_user: User = Depends(require_permission("doctor", "delete")),
    db: Session = Depends(get_db)
) -> ApiResponse:
    DoctorService.delete(db, doctor_id)
    return ApiResponse.ok("Doctor deleted successfully")
