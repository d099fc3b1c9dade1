"""
Schemas module - Request schemas for API endpoints.
"""
from app.schemas.schemas import (
    AdminCredentials,
    UserCreate,
    JobCreate,
    JobUpdate,
    JobAdRequest,
    ApplicationCreate,
    ClientCreate
)

__all__ = [
    "AdminCredentials",
    "UserCreate",
    "JobCreate",
    "JobUpdate",
    "JobAdRequest",
    "ApplicationCreate",
    "ClientCreate"
]
