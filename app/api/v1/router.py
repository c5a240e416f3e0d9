"""API v1 main router - aggregates all domain routers."""

from fastapi import APIRouter

from app.api.v1.endpoints import employees, health, roles, shifts

api_router = APIRouter()

# Include health check endpoint
api_router.include_router(
    health.router,
    tags=["Health"],
)

# Include employee endpoints
api_router.include_router(
    employees.router,
    prefix="/employees",
    tags=["Employees"],
)

# Include role endpoints
api_router.include_router(
    roles.router,
    prefix="/roles",
    tags=["Roles"],
)

# Include shift endpoints
api_router.include_router(
    shifts.router,
    prefix="/shifts",
    tags=["Shifts"],
)
