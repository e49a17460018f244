# pyright: reportMissingTypeStubs=false
"""
Role-based authorization policy.

PERMISSIONS maps (resource, action) to the roles allowed to perform it; None
means the action is public. The check is purely role-based: it does not
verify that a patient is acting on their own appointment, nor that a doctor
is acting on an appointment assigned to them.
"""

from typing import Callable, Dict, FrozenSet, Iterable, Optional, Tuple

from fastapi import Depends

from auth.dependencies import get_current_user
from core.exceptions import AuthorizationError
from models import User, UserRole

ALL_ROLES: FrozenSet[UserRole] = frozenset(UserRole)
ADMIN_ONLY: FrozenSet[UserRole] = frozenset({UserRole.ADMIN})

PERMISSIONS: Dict[Tuple[str, str], Optional[FrozenSet[UserRole]]] = {
    ("user", "read"): ADMIN_ONLY,
    ("user", "write"): ADMIN_ONLY,
    ("user", "delete"): ADMIN_ONLY,
    ("user_doctors", "read"): ALL_ROLES,
    ("user_patients", "read"): frozenset({UserRole.ADMIN, UserRole.DOCTOR}),
    ("medical_center", "read"): None,
    ("medical_center", "write"): ADMIN_ONLY,
    ("medical_center", "delete"): ADMIN_ONLY,
    ("specialty", "read"): None,
    ("specialty", "write"): ADMIN_ONLY,
    ("specialty", "delete"): ADMIN_ONLY,
    ("doctor", "read"): None,
    ("doctor", "write"): ADMIN_ONLY,
    ("doctor", "delete"): ADMIN_ONLY,
    ("appointment", "read"): ALL_ROLES,
    ("appointment", "write"): ALL_ROLES,
    ("appointment", "delete"): ALL_ROLES,
}


def permitted_roles(resource: str, action: str) -> Optional[FrozenSet[UserRole]]:
    """
    Look up the roles allowed to perform an action on a resource.

    Returns:
        The set of permitted roles, or None if the action is public

    Raises:
        KeyError: If the (resource, action) pair is not in the policy
    """
    return PERMISSIONS[(resource, action)]


def authorize(required_roles: Iterable[UserRole], actual_role: Optional[UserRole]) -> None:
    """
    Allow the request if actual_role is one of required_roles.

    Raises:
        AuthorizationError: If the role is not permitted
    """
    if actual_role is None or actual_role not in set(required_roles):
        raise AuthorizationError("You do not have permission to access this resource")


def require_roles(*roles: UserRole) -> Callable[..., User]:
    """
    Dependency that authenticates the request and ensures the user has one of the roles.

    Returns:
        Dependency function that can be used with FastAPI Depends()
    """
    allowed = frozenset(roles)

    def dependency(current_user: User = Depends(get_current_user)) -> User:
        authorize(allowed, current_user.role)
        return current_user

    return dependency


def require_permission(resource: str, action: str) -> Callable[..., User]:
    """
    Dependency enforcing the PERMISSIONS entry for (resource, action).

    Public entries have no dependency to enforce and are rejected here so a
    route cannot silently require authentication for a public action.
    """
    roles = permitted_roles(resource, action)
    if roles is None:
        raise ValueError(f"{resource}:{action} is public; no permission dependency needed")
    return require_roles(*roles)


require_admin = require_roles(UserRole.ADMIN)
