"""
User (Candidate) Routes

POST /users - Create candidate
GET /users - List candidates, newest first
GET /users/{user_id} - Get candidate
DELETE /users/{user_id} - Delete candidate
GET /users/{user_id}/applications - Candidate's applications
GET /users/{user_id}/anonymized-pdf - Anonymized profile as PDF
"""

import io

from fastapi import APIRouter, Depends
from fastapi.responses import StreamingResponse

from app.core.auth import hash_password
from app.core.errors import NotFoundError, UpstreamUnavailableError
from app.core.logging_config import get_logger
from app.schemas.schemas import UserCreate
from app.services.document_service import render_anonymized_profile
from app.services.store_service import (
    ApplicationService, UserService, get_application_service, get_user_service
)
from app.utils.normalize import normalize_email, require_fields

logger = get_logger(__name__)

router = APIRouter(prefix="/users", tags=["Users"])


@router.post("", status_code=201)
def create_user(data: UserCreate, users: UserService = Depends(get_user_service)):
    """Create a candidate account."""
    require_fields(data.model_dump(), "full_name", "email", "password")

    user = users.create(
        full_name=data.full_name,
        email=normalize_email(data.email),
        password_hash=hash_password(data.password),
        phone=data.phone or None
    )
    return {"user": user}


@router.get("")
def list_users(users: UserService = Depends(get_user_service)):
    return {"users": users.list()}


@router.get("/{user_id}")
def get_user(user_id: int, users: UserService = Depends(get_user_service)):
    user = users.get(user_id)
    if not user:
        raise NotFoundError("User not found")
    return {"user": user}


@router.delete("/{user_id}")
def delete_user(user_id: int, users: UserService = Depends(get_user_service)):
    deleted_id = users.delete(user_id)
    if deleted_id is None:
        raise NotFoundError("User not found")
    return {"message": "User deleted", "id": deleted_id}


@router.get("/{user_id}/applications")
def list_user_applications(
    user_id: int,
    applications: ApplicationService = Depends(get_application_service)
):
    """All applications of one candidate, with the job title."""
    return {"applications": applications.list_for_user(user_id)}


@router.get("/{user_id}/anonymized-pdf")
def anonymized_pdf(
    user_id: int,
    users: UserService = Depends(get_user_service),
    applications: ApplicationService = Depends(get_application_service)
):
    """
    Anonymized profile built from the latest application's AI data.
    Name and email are never written to the document.
    """
    user = users.get(user_id)
    if not user:
        raise NotFoundError("User not found")

    latest = applications.latest_for_user(user_id)
    identity = (user.get("full_name"), user.get("email"))
    try:
        pdf_bytes = render_anonymized_profile(user_id, latest, identity)
    except Exception as exc:
        logger.exception("anonymized-pdf render failed for user %s", user_id)
        raise UpstreamUnavailableError("Failed to generate PDF") from exc

    headers = {"Content-Disposition": f'attachment; filename="anonymized_profile_{user_id}.pdf"'}
    return StreamingResponse(io.BytesIO(pdf_bytes), media_type="application/pdf", headers=headers)
