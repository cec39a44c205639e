"""
API v1 router.

Aggregates all v1 endpoints.
"""

from fastapi import APIRouter

from app.api.v1.endpoints import athletes, sessions, wellness

api_router = APIRouter()

# Include endpoint routers
api_router.include_router(
    wellness.router, prefix="/wellness", tags=["Wellness"]
)
api_router.include_router(
    athletes.router, prefix="/athletes", tags=["Athletes"]
)
api_router.include_router(
    sessions.router, prefix="/sessions", tags=["Training sessions"]
)
