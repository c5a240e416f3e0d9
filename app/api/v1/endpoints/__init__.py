"""API v1 endpoints."""

from app.api.v1.endpoints import employees, health, roles, shifts

__all__ = ["employees", "health", "roles", "shifts"]
