"""API v1 router."""
from fastapi import APIRouter

from app.api.v1 import analytics, generation, progress, schedule, upload, user
from app.schemas.common import ErrorResponse

api_router = APIRouter(
    responses={
        400: {"model": ErrorResponse},
        404: {"model": ErrorResponse},
        500: {"model": ErrorResponse},
    }
)

api_router.include_router(upload.router, prefix="/upload", tags=["Upload"])
api_router.include_router(generation.router, tags=["Generation"])
api_router.include_router(progress.router, prefix="/progress", tags=["Progress"])
api_router.include_router(schedule.router, prefix="/schedule", tags=["Schedule"])
api_router.include_router(analytics.router, prefix="/analytics", tags=["Analytics"])
api_router.include_router(user.router, prefix="/users", tags=["Users"])
