from __future__ import annotations

import logging
import uuid

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from pricecheck.core.config import get_settings
from pricecheck.core.errors import InvalidRequest, PriceUnavailable
from pricecheck.core.logging import configure_logging
from pricecheck.middleware import SecurityHeadersMiddleware
from pricecheck.routes import health, prices
from pricecheck.schemas.prices import ErrorResponse

configure_logging()
logger = logging.getLogger(__name__)

settings = get_settings()

app = FastAPI(title=settings.app_name)

app.include_router(health.router, prefix=settings.api_prefix)
app.include_router(prices.router, prefix=settings.api_prefix)


def _error(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content=ErrorResponse(error=message).model_dump())


@app.exception_handler(InvalidRequest)
async def invalid_request_handler(request: Request, exc: InvalidRequest) -> JSONResponse:
    logger.info("Rejected %s: %s", request.url.path, exc.message)
    return _error(exc.status_code, exc.message)


@app.exception_handler(PriceUnavailable)
async def price_unavailable_handler(request: Request, exc: PriceUnavailable) -> JSONResponse:
    logger.warning("No price for %d items on %s", len(exc.items), request.url.path)
    return _error(exc.status_code, exc.message)


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(_: Request, exc: RequestValidationError) -> JSONResponse:
    """Report malformed query strings in the same envelope as other client errors."""
    first = exc.errors()[0] if exc.errors() else {}
    return _error(400, first.get("msg", "Invalid request"))


@app.exception_handler(Exception)
async def generic_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("Error in %s: %s", request.url.path, exc)
    return _error(500, "Internal server error")


# Innermost middleware: route failures become a 500 inside the security
# headers and CORS layers added below.
@app.middleware("http")
async def add_request_id(request: Request, call_next):
    request.state.request_id = request.headers.get("x-request-id") or uuid.uuid4().hex
    try:
        response = await call_next(request)
    except Exception as exc:
        response = await generic_exception_handler(request, exc)
    response.headers["x-request-id"] = request.state.request_id
    return response


# Security headers middleware
app.add_middleware(SecurityHeadersMiddleware)

# CORS middleware - environment-based configuration
# Development: Allow the local frontend and Node dev servers
# Production: Only allow configured specific domains
if settings.environment == "development":
    cors_origins = [
        "http://localhost:5173",  # Vite dev server
        "http://localhost:3000",  # Alternative dev port
        "http://127.0.0.1:5173",
        "http://127.0.0.1:3000",
    ]
else:
    cors_origins = [origin.strip() for origin in settings.cors_origins.split(",") if origin.strip()]

    if "*" in cors_origins:
        logger.error("SECURITY ERROR: Cannot use wildcard CORS origins with credentials in production!")
        raise ValueError("Invalid CORS configuration: wildcard origins with credentials not allowed")

app.add_middleware(
    CORSMiddleware,
    allow_origins=cors_origins,
    allow_credentials=True,
    allow_methods=["GET", "OPTIONS"],
    allow_headers=["Content-Type", "Authorization"],
    max_age=86400,
)


__all__ = ["app"]
