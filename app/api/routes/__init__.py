"""
API Routes - Combines all route modules into single router.
"""

from fastapi import APIRouter

from app.api.routes.health_routes import router as health_router
from app.api.routes.auth_routes import router as auth_router
from app.api.routes.user_routes import router as user_router
from app.api.routes.job_routes import router as job_router
from app.api.routes.application_routes import router as application_router
from app.api.routes.client_routes import router as client_router
from app.api.routes.tool_routes import router as tool_router

# Main API router
api_router = APIRouter()

# Include all sub-routers
api_router.include_router(health_router)
api_router.include_router(auth_router)
api_router.include_router(user_router)
api_router.include_router(job_router)
api_router.include_router(application_router)
api_router.include_router(client_router)
api_router.include_router(tool_router)
