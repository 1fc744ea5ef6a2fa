"""Middleware for the FastAPI application."""
from __future__ import annotations

from pricecheck.middleware.security import SecurityHeadersMiddleware

__all__ = ["SecurityHeadersMiddleware"]
