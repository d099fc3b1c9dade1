"""
API module - FastAPI routers and endpoint definitions.

Route handlers live in app.api.routes, one module per resource.

Usage:
    from app.api.routes import api_router
    app.include_router(api_router, prefix="/api")
"""
