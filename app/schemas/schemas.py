"""
Pydantic Schemas - Request bodies

All API request schemas in one file for simplicity.

Fields are optional at the schema level: routes check presence themselves so
that a missing field is reported as a 400 naming the field, before any
database access. Responses are plain dicts shaped by the routes.
"""

from pydantic import BaseModel, ConfigDict
from typing import Optional, Any


class RequestBody(BaseModel):
    # numeric JSON values are accepted for text fields (e.g. a phone number)
    model_config = ConfigDict(coerce_numbers_to_str=True)


# ============================================================
# AUTH SCHEMAS
# ============================================================

class AdminCredentials(RequestBody):
    email: Optional[str] = None
    password: Optional[str] = None


# ============================================================
# USER (CANDIDATE) SCHEMAS
# ============================================================

class UserCreate(RequestBody):
    full_name: Optional[str] = None
    email: Optional[str] = None
    password: Optional[str] = None
    phone: Optional[str] = None


# ============================================================
# JOB SCHEMAS
# ============================================================

class JobCreate(RequestBody):
    title: Optional[str] = None
    department: Optional[str] = None
    description: Optional[str] = None
    # list of strings or a comma-separated string
    requirements: Any = None
    status: Optional[str] = None
    created_by: Optional[str] = None

class JobUpdate(RequestBody):
    title: Optional[str] = None
    department: Optional[str] = None
    description: Optional[str] = None
    requirements: Any = None
    status: Optional[str] = None
    created_by: Optional[str] = None

class JobAdRequest(RequestBody):
    description: Optional[str] = None


# ============================================================
# APPLICATION SCHEMAS
# ============================================================

class ApplicationCreate(RequestBody):
    user_id: Optional[int] = None
    job_id: Optional[int] = None
    resume_url: Optional[str] = None
    cover_letter: Optional[str] = None
    status: Optional[str] = None
    ai_parsed_data: Optional[Any] = None
    admin_notes: Optional[str] = None


# ============================================================
# CLIENT SCHEMAS
# ============================================================

class ClientCreate(RequestBody):
    company: Optional[str] = None
    contact_person: Optional[str] = None
    email: Optional[str] = None
