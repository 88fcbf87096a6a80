# ruff: noqa: E402
# E402 disabled: load_dotenv() must run before other imports for Sentry DSN

import os
import time
from collections.abc import Awaitable, Callable

from dotenv import load_dotenv

load_dotenv()

import sentry_sdk
from fastapi import FastAPI, Request, Response, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from loguru import logger
from slowapi import _rate_limit_exceeded_handler
from slowapi.errors import RateLimitExceeded
from starlette.middleware.base import BaseHTTPMiddleware

from core.correlation import (
    generate_correlation_id,
    get_correlation_id,
    resolve_correlation_id,
    set_correlation_id,
)
from core.logging_config import configure_logging
from core.sentry_config import init_sentry
from helpers.rate_limiter import limiter
from helpers.request_utils import get_client_ip
from helpers.security_headers import SecurityHeadersMiddleware
from helpers.validation import first_validation_error
from models.config import settings
from models.exceptions import (
    AuthenticationException,
    DomainException,
    ServerException,
    ValidationException,
)
from routers import mailer_router

# Initialize Sentry BEFORE app creation
init_sentry()

# Configure logging with Loguru
configure_logging(os.getenv("ENVIRONMENT", settings.ENVIRONMENT))

TECHNICAL_DIFFICULTIES_MESSAGE = (
    "We are currently experiencing technical difficulties. "
    "Please try again later or contact us directly."
)


app = FastAPI(title="Contact Mailer API", version="1.0.0")

# Attach rate limiter to app
app.state.limiter = limiter
app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)  # type: ignore[arg-type]


class CorrelationIdMiddleware(BaseHTTPMiddleware):
    """Inject correlation ID into request context and Sentry."""

    async def dispatch(
        self, request: Request, call_next: Callable[[Request], Awaitable[Response]]
    ) -> Response:
        """Process request with correlation ID tracking."""
        correlation_id = resolve_correlation_id(request.headers.get("X-Correlation-ID"))
        set_correlation_id(correlation_id)

        sentry_sdk.set_tag("correlation_id", correlation_id)

        response = await call_next(request)

        response.headers["X-Correlation-ID"] = correlation_id

        return response


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """Log all incoming requests with performance monitoring."""

    async def dispatch(
        self, request: Request, call_next: Callable[[Request], Awaitable[Response]]
    ) -> Response:
        """Process request and log timing information."""
        start_time = time.perf_counter()

        client_host = get_client_ip(request) or "unknown"
        logger.info(f"Request: {request.method} {request.url.path} from {client_host}")

        response = await call_next(request)

        duration = time.perf_counter() - start_time

        logger.info(
            f"Response: {request.method} {request.url.path} "
            f"status={response.status_code} duration={duration:.3f}s"
        )

        # Outbound reCAPTCHA and SMTP calls make this the usual suspect
        if duration > settings.SLOW_REQUEST_THRESHOLD:
            logger.warning(
                f"Slow request: {request.method} {request.url.path} "
                f"took {duration:.2f}s (threshold: {settings.SLOW_REQUEST_THRESHOLD}s)"
            )

        response.headers["X-Response-Time"] = f"{duration:.3f}s"

        return response


# Middleware runs in reverse order - security headers should wrap everything
app.add_middleware(SecurityHeadersMiddleware)
app.add_middleware(CorrelationIdMiddleware)
app.add_middleware(RequestLoggingMiddleware)

# Configure CORS from environment settings
cors_origins = ["*"] if settings.ENVIRONMENT == "development" else settings.CORS_ORIGINS
app.add_middleware(
    CORSMiddleware,
    allow_origins=cors_origins,
    allow_credentials=True if settings.ENVIRONMENT != "development" else False,
    allow_methods=["GET", "POST", "OPTIONS"],
    allow_headers=["*"],
)


def _error_response(
    status_code: int, message: str, correlation_id: str
) -> JSONResponse:
    """Build the error body shared by every handler."""
    return JSONResponse(
        status_code=status_code,
        content={
            "success": False,
            "message": message,
            "correlation_id": correlation_id,
        },
    )


# Global unhandled exception handler (returns generic 500 and logs details)
@app.exception_handler(Exception)
async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Catch all unhandled exceptions with full Sentry capture."""
    correlation_id = get_correlation_id() or generate_correlation_id()

    sentry_sdk.set_tag("correlation_id", correlation_id)
    sentry_sdk.capture_exception(exc)

    logger.bind(
        path=str(request.url.path),
        method=request.method,
        client_ip=get_client_ip(request),
    ).exception(f"Unhandled exception: {exc!r}")

    return _error_response(
        status.HTTP_500_INTERNAL_SERVER_ERROR,
        TECHNICAL_DIFFICULTIES_MESSAGE,
        correlation_id,
    )


@app.exception_handler(RequestValidationError)
async def request_validation_exception_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """Report the first failing field of the request body."""
    correlation_id = get_correlation_id() or generate_correlation_id()
    field, message = first_validation_error(exc.errors())

    logger.bind(
        path=str(request.url.path), client_ip=get_client_ip(request)
    ).warning(f"Validation error on field '{field}': {message}")

    return _error_response(status.HTTP_400_BAD_REQUEST, message, correlation_id)


# Centralized domain exception handlers
@app.exception_handler(ValidationException)
async def validation_exception_handler(
    request: Request, exc: ValidationException
) -> JSONResponse:
    """Handle client errors with the specific message."""
    sentry_sdk.set_tag("exception_type", exc.__class__.__name__)

    logger.bind(
        exception_type=exc.__class__.__name__,
        field=exc.field,
        path=str(request.url.path),
        client_ip=get_client_ip(request),
    ).warning(f"Validation error: {exc.message}")

    return _error_response(
        status.HTTP_400_BAD_REQUEST, exc.message, exc.correlation_id
    )


@app.exception_handler(AuthenticationException)
async def authentication_exception_handler(
    request: Request, exc: AuthenticationException
) -> JSONResponse:
    """Handle failed bot verification with a deliberately vague message."""
    sentry_sdk.set_tag("exception_type", exc.__class__.__name__)

    logger.bind(
        exception_type=exc.__class__.__name__,
        path=str(request.url.path),
        client_ip=get_client_ip(request),
    ).warning(f"Authentication failed: {exc.message}")

    return _error_response(
        status.HTTP_401_UNAUTHORIZED, exc.message, exc.correlation_id
    )


@app.exception_handler(ServerException)
async def server_exception_handler(
    request: Request, exc: ServerException
) -> JSONResponse:
    """Handle delivery and configuration failures without exposing detail."""
    sentry_sdk.set_tag("correlation_id", exc.correlation_id)
    sentry_sdk.set_tag("exception_type", exc.__class__.__name__)
    sentry_sdk.capture_exception(exc)

    logger.bind(
        exception_type=exc.__class__.__name__,
        path=str(request.url.path),
        client_ip=get_client_ip(request),
    ).error(f"Server error: {exc.message}")

    return _error_response(
        status.HTTP_500_INTERNAL_SERVER_ERROR,
        TECHNICAL_DIFFICULTIES_MESSAGE,
        exc.correlation_id,
    )


@app.exception_handler(DomainException)
async def domain_exception_handler(
    request: Request, exc: DomainException
) -> JSONResponse:
    """Fallback for domain exceptions without a dedicated handler."""
    sentry_sdk.set_tag("correlation_id", exc.correlation_id)
    sentry_sdk.capture_exception(exc)

    logger.bind(
        exception_type=exc.__class__.__name__, path=str(request.url.path)
    ).error(f"Domain error: {exc.message}")

    return _error_response(
        status.HTTP_500_INTERNAL_SERVER_ERROR,
        TECHNICAL_DIFFICULTIES_MESSAGE,
        exc.correlation_id,
    )


# Include routers
app.include_router(mailer_router.router)


@app.get("/api/health")
def health_check() -> dict:
    """Liveness probe."""
    return {"status": "ok"}
