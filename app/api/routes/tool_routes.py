"""
Tool Routes

POST /tools/extract-skills - Extract structured resume data from a PDF upload
"""

from typing import Optional

from fastapi import APIRouter, Depends, File, UploadFile
from starlette.concurrency import run_in_threadpool

from app.core.errors import UpstreamUnavailableError, ValidationError
from app.core.logging_config import get_logger
from app.services.ai_parsing_service import MAX_RESUME_TEXT_CHARS, extract_resume
from app.services.openai_client import OpenAIClient, get_ai_client
from app.utils.file_upload import ensure_pdf_upload, extract_from_pdf

logger = get_logger(__name__)

router = APIRouter(prefix="/tools", tags=["Tools"])


@router.post("/extract-skills")
async def extract_skills(
    resume: Optional[UploadFile] = File(None),
    ai_client: Optional[OpenAIClient] = Depends(get_ai_client)
):
    """
    Parse a resume PDF into contact, summary, skills, experience, education,
    certifications, languages and links.

    The media type is checked before the upload is read or the AI is called.
    """
    ensure_pdf_upload(resume)
    if ai_client is None:
        raise UpstreamUnavailableError("OpenAI API key not configured")

    content = await resume.read()
    text = await run_in_threadpool(extract_from_pdf, content, MAX_RESUME_TEXT_CHARS)
    if not text.strip():
        raise ValidationError("Could not read PDF text")

    try:
        parsed = await run_in_threadpool(extract_resume, ai_client, text)
    except Exception as exc:
        logger.exception("extract-skills failed")
        raise UpstreamUnavailableError("Failed to extract skills") from exc
    return {"parsed": parsed}
