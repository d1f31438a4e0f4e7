"""
Main FastAPI application.
"""
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from fastapi import Request, status
from fastapi.exceptions import RequestValidationError

from app.api.v1 import api_router
from app.core.config import settings
from app.core.exceptions import AppError
from app.db.base import engine
from app.models import Base
import logging

# Configure logging BEFORE creating the app
logging.basicConfig(
    level=settings.LOG_LEVEL,
    format='%(levelname)s:\t%(name)s\t%(message)s',
    handlers=[
        logging.StreamHandler()  # Output to console
    ]
)
logging.getLogger("uvicorn").setLevel(logging.INFO)

logger = logging.getLogger(__name__)

# Create FastAPI app
app = FastAPI(
    title=settings.PROJECT_NAME,
    description="Study assistant: summaries, quizzes, schedules and progress tracking",
    version="0.1.0",
    openapi_url=f"{settings.API_V1_PREFIX}/openapi.json",
    docs_url="/docs",
    redoc_url="/redoc",
)

if not settings.BACKEND_CORS_ORIGINS or settings.BACKEND_CORS_ORIGINS == "*":
    cors_origins = ["*"]
else:
    cors_origins = [str(origin).rstrip("/") for origin in settings.BACKEND_CORS_ORIGINS]
logger.info(f"CORS enabled for origins: {cors_origins}")

app.add_middleware(
    CORSMiddleware,
    allow_origins=cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# Global exception handlers
@app.exception_handler(AppError)
async def app_error_handler(request: Request, exc: AppError):
    """Render application errors as `{success, error, details}` with their status code."""
    if exc.status_code >= 500:
        logger.error(f"{request.method} {request.url.path} failed: {exc.message}")
    return JSONResponse(status_code=exc.status_code, content=exc.to_dict())


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    """Report request validation failures as a 400 listing the offending fields."""
    fields = []
    for error in exc.errors():
        # Drop the leading "body"/"query"/"path" location
        name = ".".join(str(part) for part in error.get("loc", ())[1:])
        if name and name not in fields:
            fields.append(name)
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={
            "success": False,
            "error": f"Missing or invalid fields: {', '.join(fields) or 'request body'}",
            "details": {"missing_fields": fields},
        },
    )


@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception):
    """Log anything unexpected and answer with a generic 500."""
    logger.exception(f"Unhandled error on {request.method} {request.url.path}")
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"success": False, "error": "Internal server error", "details": str(exc)},
    )


@app.on_event("startup")
async def create_tables():
    """Create missing tables; schema changes go through alembic."""
    Base.metadata.create_all(bind=engine)
    logger.info(f"Starting {settings.PROJECT_NAME}")
    logger.info("Documentation available at: http://localhost:8000/docs")


@app.get("/", tags=["Health"])
async def root():
    return {
        "message": "AI Study Assistant API",
        "status": "healthy",
        "version": "0.1.0",
        "docs": "/docs",
    }


@app.get("/health", tags=["Health"])
async def health_check():
    return {"status": "healthy"}


# Include API routers
app.include_router(api_router, prefix=settings.API_V1_PREFIX)
