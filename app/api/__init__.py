"""API routes for the Health Log Question Engine."""

from fastapi import APIRouter

from app.api.v1 import appointments, health, symptoms

# Create main API router
api_router = APIRouter()

api_router.include_router(health.router, tags=["health"])
api_router.include_router(appointments.router)
api_router.include_router(symptoms.router)

__all__ = ["api_router"]
