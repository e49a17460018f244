# pyright: reportMissingTypeStubs=false
"""
Specialty API endpoints.

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
from api.responses import ApiResponse, CamelModel, SpecialtyResponse
from models import User
from services.specialty_service import SpecialtyService

logger = logging.getLogger(__name__)

router = APIRouter()


class SpecialtyCreateRequest(CamelModel):
    """Request model for creating a specialty. The ID is chosen by the caller."""
    model_config = ConfigDict(str_strip_whitespace=True)

    id: int = Field(..., ge=1)
    name: str = Field(..., min_length=1, max_length=MAX_NAME_LENGTH)
    description: Optional[str] = None


class SpecialtyUpdateRequest(CamelModel):
    """Request model for updating a specialty."""
    model_config = ConfigDict(str_strip_whitespace=True)

    name: Optional[str] = Field(None, min_length=1, max_length=MAX_NAME_LENGTH)
    description: Optional[str] = None


@router.get("", summary="List all specialties")
async def list_specialties(db: Session = Depends(get_db)) -> ApiResponse:
    specialties = SpecialtyService.find_all(db)
    return ApiResponse.ok(
        "Specialties retrieved successfully",
        [SpecialtyResponse.model_validate(s) for s in specialties]
    )


@router.get("/{specialty_id}", summary="Get a specialty by ID")
async def get_specialty(specialty_id: int, db: Session = Depends(get_db)) -> ApiResponse:
    specialty = SpecialtyService.find_by_id(db, specialty_id)
    return ApiResponse.ok("Specialty retrieved successfully", SpecialtyResponse.model_validate(specialty))


@router.post("", summary="Create a specialty", status_code=status.HTTP_201_CREATED)
async def create_specialty(
    request: SpecialtyCreateRequest,
    current_user: User = Depends(require_permission("specialty", "write")),
    db: Session = Depends(get_db)
) -> ApiResponse:
    specialty = SpecialtyService.create(
        db,
        specialty_id=request.id,
        name=request.name,
        description=request.description
    )
    return ApiResponse.ok("Specialty created successfully", SpecialtyResponse.model_validate(specialty))


@router.put("/{specialty_id}", summary="Update a specialty")
async def update_specialty(
    specialty_id: int,
    request: SpecialtyUpdateRequest,
    current_user: User = Depends(require_permission("specialty", "write")),
    db: Session = Depends(get_db)
) -> ApiResponse:
    specialty = SpecialtyService.update(db, specialty_id, request.model_dump(exclude_unset=True))
    return ApiResponse.ok("Specialty updated successfully", SpecialtyResponse.model_validate(specialty))


@router.delete("/{specialty_id}", summary="Delete a specialty")
async def delete_specialty(
    specialty_id: int,
    current_user: User = Depends(require_permission("specialty", "delete")),
    db: Session = Depends(get_db)
) -> ApiResponse:
    SpecialtyService.delete(db, specialty_id)
    return ApiResponse.ok("Specialty deleted successfully")
