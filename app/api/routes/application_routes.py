"""
Application Routes

GET /applications - All applications with candidate and job display fields
POST /applications - Create application (one per user and job)
GET /applications/{application_id} - Get one application
"""

from fastapi import APIRouter, Depends

from app.core.errors import NotFoundError
from app.schemas.schemas import ApplicationCreate
from app.services.store_service import ApplicationService, get_application_service
from app.utils.normalize import require_fields

router = APIRouter(prefix="/applications", tags=["Applications"])


@router.get("")
def list_applications(applications: ApplicationService = Depends(get_application_service)):
    return {"applications": applications.list()}


@router.post("", status_code=201)
def create_application(
    data: ApplicationCreate,
    applications: ApplicationService = Depends(get_application_service)
):
    """Apply a candidate to a job. A second application for the same pair is a 409."""
    require_fields(data.model_dump(), "user_id", "job_id")

    application = applications.create({
        "user_id": data.user_id,
        "job_id": data.job_id,
        "resume_url": data.resume_url or None,
        "cover_letter": data.cover_letter or None,
        "status": data.status if data.status is not None else "Pending",
        "ai_parsed_data": data.ai_parsed_data or None,
        "admin_notes": data.admin_notes or None,
    })
    return {"application": application}


@router.get("/{application_id}")
def get_application(
    application_id: int,
    applications: ApplicationService = Depends(get_application_service)
):
    application = applications.get(application_id)
    if not application:
        raise NotFoundError("Application not found")
    return {"application": application}
