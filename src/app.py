"""Main FastAPI application module.

This module initializes the FastAPI application, registers all route handlers
and translates errors into the ``{"success", "message", "data"}`` envelope.
"""

import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from core.logging_config import setup_logging
from config import (
    API_HOST,
    API_PORT,
    APP_ENV,
    CORS_ALLOWED_ORIGINS,
)
from core.database import init_db
from core.exceptions import ClassroomError
from api.routes import assignment, auth, chat, class_route, event, profile

# Setup logging
setup_logging()
logger = logging.getLogger(__name__)

# Initialize FastAPI application
app = FastAPI(
    title="Classroom Portal API",
    description="Backend API service for classes, assignments, grades and chats.",
    version="1.0.0",
)

# Configure CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=CORS_ALLOWED_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


def _envelope(status_code: int, message: str, data=None) -> JSONResponse:
    content = {"success": False, "message": message}
    if data is not None:
        content["data"] = data
    return JSONResponse(status_code=status_code, content=content)


@app.exception_handler(ClassroomError)
async def classroom_error_handler(request: Request, exc: ClassroomError) -> JSONResponse:
    return _envelope(exc.status_code, exc.message, exc.data)


@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    return _envelope(exc.status_code, str(exc.detail))


@app.exception_handler(RequestValidationError)
async def validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Report the first invalid field as a 400."""
    errors = exc.errors()
    if not errors:
        return _envelope(400, "Invalid request")
    first = errors[0]
    field = ".".join(str(part) for part in first.get("loc", ()) if part != "body")
    message = first.get("msg", "Invalid value").removeprefix("Value error, ")
    return _envelope(400, f"{field}: {message}" if field else message)


@app.exception_handler(Exception)
async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    return _envelope(500, "Internal server error")


if APP_ENV == "development":

    @app.middleware("http")
    async def log_requests(request: Request, call_next):
        logger.info("%s %s", request.method, request.url.path)
        return await call_next(request)


# Register route handlers
app.include_router(auth.router)
app.include_router(profile.router)
app.include_router(class_route.router)
app.include_router(assignment.router)
app.include_router(chat.router)
app.include_router(event.router)


@app.on_event("startup")
def startup_tasks() -> None:
    """Create missing tables before serving requests."""
    init_db()


@app.get("/", summary="API root", tags=["Info"])
def root() -> dict:
    """API root, returning API information and documentation links."""
    return {
        "name": "Classroom Portal API",
        "version": "1.0.0",
        "description": "Backend API service for classes, assignments, grades and chats.",
        "docs": {
            "swagger": "/docs",
            "redoc": "/redoc",
        },
        "health": "/api/health",
    }


@app.get("/api/health", summary="Health check", tags=["Health"])
def health() -> dict:
    return {"success": True, "message": "Server is running"}


# --- Startup code for direct execution ---
if __name__ == "__main__":
    import uvicorn

    server_url = f"http://{API_HOST}:{API_PORT}"
    logger.info("Starting Classroom Portal API at %s (docs: %s/docs)", server_url, server_url)
    uvicorn.run("app:app", host=API_HOST, port=API_PORT, reload=APP_ENV == "development")
