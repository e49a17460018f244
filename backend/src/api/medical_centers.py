# pyright: reportMissingTypeStubs=false
"""
Medical Center API endpoints.

Reads are public; writes require the admin role.
"""

import logging
from typing import Optional
from fastapi import APIRouter, Depends, status
from pydantic import ConfigDict, Field
from sqlalchemy.orm import Session

from core.constants import MAX_NAME_LENGTH
from core.database import get_db
from auth.permissions import require_permission
from api.responses import ApiResponse, CamelModel, MedicalCenterResponse
from models import City, User
from services.medical_center_service import MedicalCenterService

logger = logging.getLogger(__name__)

router = APIRouter()


# ===== Request Models =====

class MedicalCenterCreateRequest(CamelModel):
    """Request model for creating a medical center."""
    model_config = ConfigDict(str_strip_whitespace=True)

    name: str = Field(..., min_length=1, max_length=MAX_NAME_LENGTH)
    address: str = Field(..., min_length=1)
    city: City
    active: bool = True


class MedicalCenterUpdateRequest(CamelModel):
    """Request model for updating a medical center."""
    model_config = ConfigDict(str_strip_whitespace=True)

    name: Optional[str] = Field(None, min_length=1, max_length=MAX_NAME_LENGTH)
    address: Optional[str] = Field(None, min_length=1)
    city: Optional[City] = None
    active: Optional[bool] = None


def _centers(centers: list[object]) -> list[MedicalCenterResponse]:
    return [MedicalCenterResponse.model_validate(c) for c in centers]


# ===== API Endpoints =====

@router.get("", summary="List all medical centers")
async def list_medical_centers(db: Session = Depends(get_db)) -> ApiResponse:
    centers = MedicalCenterService.find_all(db)
    return ApiResponse.ok("Medical centers retrieved successfully", _centers(centers))


@router.get("/city/{city}", summary="List medical centers in a city")
async def list_medical_centers_by_city(city: City, db: Session = Depends(get_db)) -> ApiResponse:
    centers = MedicalCenterService.find_by_city(db, city)
    return ApiResponse.ok("Medical centers retrieved successfully", _centers(centers))


@router.get("/{center_id}", summary="Get a medical center by ID")
async def get_medical_center(center_id: int, db: Session = Depends(get_db)) -> ApiResponse:
    center = MedicalCenterService.find_by_id(db, center_id)
    return ApiResponse.ok("Medical center retrieved successfully", MedicalCenterResponse.model_validate(center))


@router.post("", summary="Create a medical center", status_code=status.HTTP_201_CREATED)
async def create_medical_center(
    request: MedicalCenterCreateRequest,
    current_user: User = Depends(require_permission("medical_center", "write")),
    db: Session = Depends(get_db)
) -> ApiResponse:
    center = MedicalCenterService.create(
        db,
        name=request.name,
        address=request.address,
        city=request.city,
        active=request.active
    )
    return ApiResponse.ok("Medical center created successfully", MedicalCenterResponse.model_validate(center))


@router.put("/{center_id}", summary="Update a medical center")
async def update_medical_center(
    center_id: int,
    request: MedicalCenterUpdateRequest,
    current_user: User = Depends(require_permission("medical_center", "write")),
    db: Session = Depends(get_db)
) -> ApiResponse:
    center = MedicalCenterService.update(db, center_id, request.model_dump(exclude_unset=True))
    return ApiResponse.ok("Medical center updated successfully", MedicalCenterResponse.model_validate(center))


@router.patch("/{center_id}/toggle-status", summary="Toggle a medical center's active flag")
async def toggle_medical_center_status(
    center_id: int,
    current_user: User = Depends(require_permission("medical_center", "write")),
    db: Session = Depends(get_db)
) -> ApiResponse:
    center = MedicalCenterService.toggle_status(db, center_id)
    state = "activated" if center.active else "deactivated"
    return ApiResponse.ok(f"Medical center {state} successfully", MedicalCenterResponse.model_validate(center))


@router.delete("/{center_id}", summary="Delete a medical center")
async def delete_medical_center(
    center_id: int,
    current_user: User = Depends(require_permission("medical_center", "delete")),
    db: Session = Depends(get_db)
) -> ApiResponse:
    MedicalCenterService.delete(db, center_id)
    return ApiResponse.ok("Medical center deleted successfully")
