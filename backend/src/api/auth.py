# pyright: reportMissingTypeStubs=false
"""
Authentication API endpoints.

Handles registration, email/password login, the current-user lookup and
password changes.
"""

import logging
from fastapi import APIRouter, Depends, status
from pydantic import Field
from sqlalchemy.orm import Session

from core.constants import MIN_PASSWORD_LENGTH
from core.database import get_db
from auth.dependencies import get_current_user, get_auth_service
from api.responses import ApiResponse, AuthResponse, CamelModel, UserResponse
from api.shared import UserCreateRequest
from models import User
from services.auth_service import AuthService

logger = logging.getLogger(__name__)

router = APIRouter()


class LoginRequest(CamelModel):
    """Request model for login."""
    email: str
    password: str


class ChangePasswordRequest(CamelModel):
    """Request model for changing the current user's password."""
    current_password: str
    new_password: str = Field(..., min_length=MIN_PASSWORD_LENGTH)


@router.post("/register", summary="Register a new user", status_code=status.HTTP_201_CREATED)
async def register(
    request: UserCreateRequest,
    db: Session = Depends(get_db),
    auth_service: AuthService = Depends(get_auth_service)
) -> ApiResponse:
    """
    Create a new account and return it together with a bearer token.

    Duplicate email or DNI yields 400.
    """
    user, token = auth_service.register(
        db,
        dni=request.dni,
        name=request.name,
        email=request.email,
        password=request.password,
        role=request.role
    )
    return ApiResponse.ok(
        "User registered successfully",
        AuthResponse(user=UserResponse.model_validate(user), token=token)
    )


@router.post("/login", summary="Log in with email and password")
async def login(
    request: LoginRequest,
    db: Session = Depends(get_db),
    auth_service: AuthService = Depends(get_auth_service)
) -> ApiResponse:
    """
    Authenticate with email and password.

    Unknown email and wrong password both yield 401 "Invalid credentials".
    """
    user, token = auth_service.authenticate(db, request.email.strip().lower(), request.password)
    return ApiResponse.ok(
        "Login successful",
        AuthResponse(user=UserResponse.model_validate(user), token=token)
    )


@router.get("/me", summary="Get the current user")
async def get_me(current_user: User = Depends(get_current_user)) -> ApiResponse:
    """Return the user the bearer token belongs to."""
    return ApiResponse.ok("User retrieved successfully", UserResponse.model_validate(current_user))


@router.post("/change-password", summary="Change the current user's password")
async def change_password(
    request: ChangePasswordRequest,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
    auth_service: AuthService = Depends(get_auth_service)
) -> ApiResponse:
    """Replace the password after re-verifying the current one (400 if it does not match)."""
    auth_service.change_password(
        db,
        user_id=current_user.id,
        current_password=request.current_password,
        new_password=request.new_password
    )
    return ApiResponse.ok("Password changed successfully")
