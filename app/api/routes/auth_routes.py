"""
Authentication Routes

POST /auth/register-admin - Register new admin account
POST /auth/login-admin - Verify admin credentials (identity only, no token)
"""

from fastapi import APIRouter, Depends

from app.core.auth import hash_password, verify_password
from app.core.errors import UnauthorizedError, ValidationError
from app.schemas.schemas import AdminCredentials
from app.services.store_service import AdminUserService, get_admin_user_service
from app.utils.normalize import is_valid_email, normalize_email, require_fields

router = APIRouter(prefix="/auth", tags=["Authentication"])

INVALID_CREDENTIALS = "Invalid credentials"


@router.post("/register-admin", status_code=201)
def register_admin(
    data: AdminCredentials,
    admins: AdminUserService = Depends(get_admin_user_service)
):
    """Register a new admin. Email is stored lower-cased."""
    require_fields(data.model_dump(), "email", "password")

    email = normalize_email(data.email)
    if not is_valid_email(email):
        raise ValidationError("Invalid email format")

    user = admins.create(email, hash_password(data.password))
    return {"user": user}


@router.post("/login-admin")
def login_admin(
    data: AdminCredentials,
    admins: AdminUserService = Depends(get_admin_user_service)
):
    """
    Check admin credentials.

    Unknown email and wrong password produce the same 401 so callers
    cannot probe which emails are registered.
    """
    require_fields(data.model_dump(), "email", "password")

    admin = admins.get_by_email(normalize_email(data.email))
    if not admin:
        raise UnauthorizedError(INVALID_CREDENTIALS)

    if not verify_password(data.password, admin.get("password_hash")):
        raise UnauthorizedError(INVALID_CREDENTIALS)

    return {"user": {"id": admin["id"], "email": admin["email"]}}
