"""
API module - FastAPI routers and endpoint definitions.

Contains:
- Main API router that combines all sub-routers
- Route handlers for auth, students, professors and positions

Usage:
    from app.api.routes import api_router
    app.include_router(api_router, prefix="/api")
"""
