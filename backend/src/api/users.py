# pyright: reportMissingTypeStubs=false
"""
User Management API endpoints.

All write operations and the general listing are restricted to admins.
The doctor and patient listings are open to wider sets of roles.
"""

import logging
from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from core.database import get_db
from auth.permissions import require_permission
from api.responses import ApiResponse, UserResponse, users_to_response
from api.shared import UserCreateRequest, UserUpdateRequest
from models import User
from services.user_service import UserService

logger = logging.getLogger(__name__)

router = APIRouter()


# Static paths are registered before /{user_id} so they are not captured by it

@router.get("/doctors", summary="List users with the doctor role")
async def list_doctor_users(
    current_user: User = Depends(require_permission("user_doctors", "read")),
    db: Session = Depends(get_db)
) -> ApiResponse:
    users = UserService.get_doctors(db)
    return ApiResponse.ok("Doctors retrieved successfully", users_to_response(users))


@router.get("/patients", summary="List users with the patient role")
async def list_patient_users(
    current_user: User = Depends(require_permission("user_patients", "read")),
    db: Session = Depends(get_db)
) -> ApiResponse:
    users = UserService.get_patients(db)
    return ApiResponse.ok("Patients retrieved successfully", users_to_response(users))


@router.get("", summary="List all users")
async def list_users(
    current_user: User = Depends(require_permission("user", "read")),
    db: Session = Depends(get_db)
) -> ApiResponse:
    users = UserService.find_all(db)
    return ApiResponse.ok("Users retrieved successfully", users_to_response(users))


@router.get("/{user_id}", summary="Get a user by ID")
async def get_user(
    user_id: int,
    current_user: User = Depends(require_permission("user", "read")),
    db: Session = Depends(get_db)
) -> ApiResponse:
    user = UserService.find_by_id(db, user_id)
    return ApiResponse.ok("User retrieved successfully", UserResponse.model_validate(user))


@router.post("", summary="Create a user", status_code=status.HTTP_201_CREATED)
async def create_user(
    request: UserCreateRequest,
    current_user: User = Depends(require_permission("user", "write")),
    db: Session = Depends(get_db)
) -> ApiResponse:
    user = UserService.create(
        db,
        dni=request.dni,
        name=request.name,
        email=request.email,
        password=request.password,
        role=request.role
    )
    return ApiResponse.ok("User created successfully", UserResponse.model_validate(user))


@router.put("/{user_id}", summary="Update a user")
async def update_user(
    user_id: int,
    request: UserUpdateRequest,
    current_user: User = Depends(require_permission("user", "write")),
    db: Session = Depends(get_db)
) -> ApiResponse:
    user = UserService.update(db, user_id, request.model_dump(exclude_unset=True))
    return ApiResponse.ok("User updated successfully", UserResponse.model_validate(user))


@router.delete("/{user_id}", summary="Delete a user")
async def delete_user(
    user_id: int,
    current_user: User = Depends(require_permission("user", "delete")),
    db: Session = Depends(get_db)
) -> ApiResponse:
    UserService.delete(db, user_id)
    return ApiResponse.ok("User deleted successfully")
