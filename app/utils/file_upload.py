"""
File Upload Utility - Extract text from resume files.

Supported formats:
- PDF (application/pdf) using PyPDF2

Other media types are rejected before anything else happens to the upload.
"""

import io
from typing import Optional

from fastapi import UploadFile
from PyPDF2 import PdfReader

from app.core.errors import UnsupportedMediaError, ValidationError
from app.core.logging_config import get_logger

logger = get_logger(__name__)

PDF_MEDIA_TYPE = "application/pdf"


def ensure_pdf_upload(file: Optional[UploadFile]) -> UploadFile:
    """Reject a missing upload (400) or a non-PDF media type (415)."""
    if file is None:
        raise ValidationError("No file uploaded")
    if file.content_type != PDF_MEDIA_TYPE:
        raise UnsupportedMediaError("Only PDF files are supported")
    return file


def extract_from_pdf(content: bytes, max_chars: int) -> str:
    """
    Extract text from PDF bytes, capped at max_chars.
    Unreadable documents yield an empty string.
    """
    try:
        reader = PdfReader(io.BytesIO(content))
        text_parts = []
        for page in reader.pages:
            page_text = page.extract_text()
            if page_text:
                text_parts.append(page_text)
    except Exception as e:
        logger.warning("Could not read PDF upload: %s", e)
        return ""
    return "\n".join(text_parts)[:max_chars]
