"""
JobSpeedy AI Admin Backend - Main Application

FastAPI backend with:
- PostgreSQL for all records (admins, candidates, jobs, applications, clients)
- OpenAI for job ad generation and resume extraction
- reportlab for anonymized candidate PDFs
- XML job feeds for external portals

Run: uvicorn app.main:app --reload --port 4000
"""

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from app.api.routes import api_router
from app.core.config import get_settings
from app.core.errors import register_exception_handlers
from app.core.logging_config import configure_logging, get_logger
from app.db.postgres import dispose_engine

configure_logging()
logger = get_logger(__name__)
settings = get_settings()

# Create FastAPI app
app = FastAPI(
    title="JobSpeedy AI Admin Backend",
    description="""
    Admin backend for the JobSpeedy recruiting platform.

    ## Features
    - **Auth**: Admin registration and login (identity only)
    - **Users**: Candidate accounts, anonymized PDF profiles
    - **Jobs**: CRUD, AI job ad generation, XML feeds for job portals
    - **Applications**: One application per candidate and job
    - **Clients**: Hiring companies with job counts
    - **Tools**: AI resume extraction from PDF uploads
    """,
    version="1.0.0",
    docs_url="/docs",
    redoc_url="/redoc"
)

# CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origin_list,
    allow_credentials=False,
    allow_methods=["*"],
    allow_headers=["*"],
)

register_exception_handlers(app)

# Include API routes
app.include_router(api_router, prefix="/api")


@app.on_event("shutdown")
def shutdown_event():
    """Drain the PostgreSQL pool."""
    dispose_engine()
    logger.info("Shutdown complete")


if __name__ == "__main__":
    import uvicorn

    uvicorn.run("app.main:app", host="0.0.0.0", port=settings.port)
