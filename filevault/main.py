"""FastAPI application entry point."""

import logging
from contextlib import asynccontextmanager
from pathlib import Path

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from starlette.exceptions import HTTPException as StarletteHTTPException

from filevault.api import auth, files
from filevault.api.responses import api_response, error_response
from filevault.config import get_settings
from filevault.database import init_db
from filevault.errors import ApiError

settings = get_settings()

logging.basicConfig(
    level=settings.log_level.upper(),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Handle application startup and shutdown events."""
    if settings.create_tables_on_startup:
        init_db()
    Path(settings.upload_dir).mkdir(parents=True, exist_ok=True)
    logger.info(f"FileVault started ({settings.environment}), uploads in {settings.upload_dir}")
    yield


app = FastAPI(
    title="FileVault API",
    description="Private per-user file upload, listing and deletion",
    version="0.1.0",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(ApiError)
async def api_error_handler(request: Request, exc: ApiError):
    """Render errors raised from dependencies."""
    return error_response(exc.error)


@app.exception_handler(StarletteHTTPException)
async def http_error_handler(request: Request, exc: StarletteHTTPException):
    """Wrap routing errors such as unknown paths and wrong methods in the envelope."""
    return api_response(str(exc.detail), status_code=exc.status_code, headers=exc.headers)


@app.exception_handler(RequestValidationError)
async def request_validation_handler(request: Request, exc: RequestValidationError):
    """Report malformed request bodies and parameters as 400."""
    problems = []
    for err in exc.errors():
        field = ".".join(str(part) for part in err["loc"][1:]) or str(err["loc"][0])
        problems.append(f"{field}: {err['msg']}")
    return api_response(
        "Invalid request: " + "; ".join(problems),
        status_code=status.HTTP_400_BAD_REQUEST,
    )


@app.exception_handler(Exception)
async def unexpected_error_handler(request: Request, exc: Exception):
    """Convert anything unhandled into a 500 envelope."""
    logger.exception(f"Unhandled error on {request.method} {request.url.path}")
    return api_response(
        f"An error occurred: {exc}",
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
    )


# Register routers
app.include_router(auth.router)
app.include_router(files.router)


@app.get("/health")
async def health_check():
    """Health check endpoint."""
    return {"status": "healthy", "environment": settings.environment}
