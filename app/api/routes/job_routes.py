"""
Job Routes

GET /jobs - List jobs, newest first
POST /jobs - Create job posting
POST /jobs/generate-ad - Generate a job ad with AI
GET /jobs/{job_id} - Get job details
PUT /jobs/{job_id} - Partial update
DELETE /jobs/{job_id} - Delete job
GET /jobs/{job_id}/applications - Applications for a job
GET /jobs/{job_id}/xml-feed/{portal} - Job as a portal XML feed
"""

from typing import Optional

from fastapi import APIRouter, Depends
from fastapi.responses import Response

from app.core.config import Settings, get_settings
from app.core.errors import NotFoundError, UpstreamUnavailableError, ValidationError
from app.core.logging_config import get_logger
from app.schemas.schemas import JobAdRequest, JobCreate, JobUpdate
from app.services.ai_parsing_service import generate_job_ad
from app.services.document_service import (
    is_supported_portal, normalize_portal, render_job_feed
)
from app.services.openai_client import OpenAIClient, get_ai_client
from app.services.store_service import (
    ApplicationService, JobService, get_application_service, get_job_service
)
from app.utils.normalize import normalize_string_list, require_fields

logger = get_logger(__name__)

router = APIRouter(prefix="/jobs", tags=["Jobs"])


@router.get("")
def list_jobs(jobs: JobService = Depends(get_job_service)):
    """List all jobs, newest first. Unpaginated."""
    return {"jobs": jobs.list()}


@router.post("", status_code=201)
def create_job(data: JobCreate, jobs: JobService = Depends(get_job_service)):
    """Create a job. requirements may be a list or a comma-separated string."""
    require_fields(data.model_dump(), "title", "department")

    job = jobs.create({
        "title": data.title,
        "department": data.department,
        "description": data.description or None,
        "requirements": normalize_string_list(data.requirements),
        "status": data.status if data.status is not None else "Open",
        "created_by": data.created_by if data.created_by is not None else "Admin",
    })
    return {"job": job}


@router.post("/generate-ad")
def generate_ad(
    data: JobAdRequest,
    ai_client: Optional[OpenAIClient] = Depends(get_ai_client)
):
    """Generate a structured job ad from a free-text description."""
    require_fields(data.model_dump(), "description")
    if ai_client is None:
        raise UpstreamUnavailableError("OpenAI API key not configured")

    try:
        job_ad = generate_job_ad(ai_client, data.description)
    except Exception as exc:
        logger.exception("generate-ad failed")
        raise UpstreamUnavailableError(f"Failed to generate job ad: {exc}") from exc
    return {"jobAd": job_ad}


@router.get("/{job_id}")
def get_job(job_id: int, jobs: JobService = Depends(get_job_service)):
    job = jobs.get(job_id)
    if not job:
        raise NotFoundError("Job not found")
    return {"job": job}


@router.put("/{job_id}")
def update_job(job_id: int, data: JobUpdate, jobs: JobService = Depends(get_job_service)):
    """Update only the fields provided; absent or null fields keep their value."""
    fields = data.model_dump()
    if data.requirements is not None:
        fields["requirements"] = normalize_string_list(data.requirements)

    job = jobs.update(job_id, fields)
    if not job:
        raise NotFoundError("Job not found")
    return {"job": job}


@router.delete("/{job_id}")
def delete_job(job_id: int, jobs: JobService = Depends(get_job_service)):
    deleted_id = jobs.delete(job_id)
    if deleted_id is None:
        raise NotFoundError("Job not found")
    return {"message": "Job deleted", "id": deleted_id}


@router.get("/{job_id}/applications")
def list_job_applications(
    job_id: int,
    applications: ApplicationService = Depends(get_application_service)
):
    """All applications for one job, with candidate name and email."""
    return {"applications": applications.list_for_job(job_id)}


@router.get("/{job_id}/xml-feed/{portal}")
def job_xml_feed(
    job_id: int,
    portal: str,
    jobs: JobService = Depends(get_job_service),
    settings: Settings = Depends(get_settings)
):
    """Render the job in the XML shape a portal expects (indeed, glassdoor, linkedin, generic)."""
    key = normalize_portal(portal)
    if not is_supported_portal(key):
        raise ValidationError("Unsupported portal")

    job = jobs.get(job_id)
    if not job:
        raise NotFoundError("Job not found")

    try:
        xml = render_job_feed(job, key, settings.public_site_url, settings.publisher_name)
    except Exception as exc:
        logger.exception("xml-feed render failed for job %s", job_id)
        raise UpstreamUnavailableError("Failed to generate XML feed") from exc

    headers = {"Content-Disposition": f'attachment; filename="job_{job["id"]}_{key}.xml"'}
    return Response(content=xml, media_type="application/xml", headers=headers)
