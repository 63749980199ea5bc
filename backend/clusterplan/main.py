"""FastAPI application entry point.

Deployment Requirements:
- Binds to PORT from environment variable
- Health endpoint at /health for platform health checks
- Graceful shutdown: uvicorn handles SIGTERM and runs the lifespan shutdown
- All logs to stdout/stderr

Error Logging Requirements:
- Log all incoming requests with method, path, request_id
- Log request body at DEBUG level (sanitize sensitive fields)
- Log response status and timing for every request
- Return structured error responses: {"error": str, "code": str, "request_id": str}
- Log 4xx errors at WARNING, 5xx at ERROR
"""

import json
import logging
import time
import uuid
from contextlib import asynccontextmanager
from typing import Any

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.middleware.base import BaseHTTPMiddleware

from clusterplan.api.v1 import router as api_v1_router
from clusterplan.core.config import get_settings
from clusterplan.core.database import db_manager
from clusterplan.core.logging import get_logger, setup_logging

# Set up logging before anything else
setup_logging()
logger = get_logger(__name__)

# Sensitive fields to redact from request body logs
SENSITIVE_FIELDS = {
    "password",
    "token",
    "secret",
    "api_key",
    "authorization",
}


def sanitize_body(body: Any) -> Any:
    """Redact sensitive fields from request body for logging."""
    if not isinstance(body, dict):
        return body
    sanitized: dict[str, Any] = {}
    for key, value in body.items():
        if key.lower() in SENSITIVE_FIELDS:
            sanitized[key] = "****"
        elif isinstance(value, dict):
            sanitized[key] = sanitize_body(value)
        else:
            sanitized[key] = value
    return sanitized


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """Middleware to log all incoming requests with timing and request_id."""

    async def dispatch(self, request: Request, call_next: Any) -> Any:
        request_id = str(uuid.uuid4())
        request.state.request_id = request_id

        start_time = time.monotonic()
        method = request.method
        path = request.url.path

        logger.info(
            "Request started",
            extra={
                "request_id": request_id,
                "method": method,
                "path": path,
                "query_params": str(request.query_params)
                if request.query_params
                else None,
            },
        )

        if method not in ("GET", "HEAD", "OPTIONS") and logger.isEnabledFor(
            logging.DEBUG
        ):
            body = await request.body()
            if body:
                try:
                    logger.debug(
                        "Request body",
                        extra={
                            "request_id": request_id,
                            "body": sanitize_body(json.loads(body)),
                        },
                    )
                except json.JSONDecodeError:
                    logger.debug(
                        "Request body (non-JSON)",
                        extra={"request_id": request_id, "body_length": len(body)},
                    )

        response = await call_next(request)

        duration_ms = (time.monotonic() - start_time) * 1000
        status_code = response.status_code
        response.headers["X-Request-ID"] = request_id

        log_extra = {
            "request_id": request_id,
            "method": method,
            "path": path,
            "status_code": status_code,
            "duration_ms": round(duration_ms, 2),
        }

        if status_code >= 500:
            logger.error("Request failed", extra=log_extra)
        elif status_code >= 400:
            logger.warning("Request error", extra=log_extra)
        else:
            logger.info("Request completed", extra=log_extra)

        return response


@asynccontextmanager
async def lifespan(app: FastAPI) -> Any:
    """Application lifespan manager for startup/shutdown.

    Handles:
    - Database initialization
    - Closing the database engine on shutdown
    """
    settings = get_settings()
    logger.info(
        "Starting application",
        extra={
            "app_name": settings.app_name,
            "version": settings.app_version,
            "environment": settings.environment,
        },
    )

    try:
        db_manager.init_db()
        logger.info("Database initialized")
    except Exception as e:
        logger.error(f"Failed to initialize database: {e}")
        raise

    yield

    logger.info("Shutting down application")
    await db_manager.close()
    logger.info("Application shutdown complete")


def create_app() -> FastAPI:
    """Create and configure the FastAPI application."""
    settings = get_settings()

    app = FastAPI(
        title=settings.app_name,
        version=settings.app_version,
        docs_url="/docs" if settings.debug else None,
        redoc_url="/redoc" if settings.debug else None,
        lifespan=lifespan,
    )

    # Request logging middleware (added first, runs last)
    app.add_middleware(RequestLoggingMiddleware)

    cors_origins: list[str] = ["*"]
    if settings.frontend_url:
        cors_origins = [settings.frontend_url]
        logger.info(
            "CORS configured for production",
            extra={"allowed_origins": cors_origins},
        )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(
        request: Request, exc: RequestValidationError
    ) -> JSONResponse:
        """Handle validation errors with structured response."""
        request_id = getattr(request.state, "request_id", "unknown")
        errors = exc.errors()
        error_msg = "; ".join(
            f"{'.'.join(str(loc) for loc in e['loc'])}: {e['msg']}" for e in errors
        )
        logger.warning(
            "Validation error",
            extra={"request_id": request_id, "error_count": len(errors)},
        )
        return JSONResponse(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            content={
                "error": error_msg,
                "code": "VALIDATION_ERROR",
                "request_id": request_id,
            },
        )

    @app.exception_handler(Exception)
    async def general_exception_handler(
        request: Request, exc: Exception
    ) -> JSONResponse:
        """Handle unexpected errors with structured response."""
        request_id = getattr(request.state, "request_id", "unknown")
        logger.error(
            "Unhandled exception",
            extra={
                "request_id": request_id,
                "error_type": type(exc).__name__,
                "error_message": str(exc),
            },
            exc_info=True,
        )
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={
                "error": "An internal error occurred. Please try again later.",
                "code": "INTERNAL_ERROR",
                "request_id": request_id,
            },
        )

    @app.get("/health", tags=["Health"])
    async def health_check() -> dict[str, str]:
        """Health check endpoint.

        Returns {"status": "ok"} if the service is running.
        """
        return {"status": "ok"}

    @app.get("/health/db", tags=["Health"])
    async def database_health() -> dict[str, str | bool]:
        """Check database connectivity."""
        is_healthy = await db_manager.check_connection()
        return {
            "status": "ok" if is_healthy else "error",
            "database": is_healthy,
        }

    app.include_router(api_v1_router)

    return app


# Create the application instance
app = create_app()


if __name__ == "__main__":
    import uvicorn

    settings = get_settings()
    uvicorn.run(
        "clusterplan.main:app",
        host=settings.host,
        port=settings.port,
        reload=settings.debug,
    )
