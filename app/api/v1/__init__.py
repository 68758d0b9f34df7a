"""API v1 routes."""

from app.api.v1 import appointments, health, symptoms

__all__ = ["appointments", "health", "symptoms"]
