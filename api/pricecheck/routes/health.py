from __future__ import annotations

from fastapi import APIRouter

router = APIRouter(tags=["health"])


@router.get("/healthz")
async def healthcheck() -> dict[str, str]:
    """
    Basic liveness probe - returns OK if the application is running.
    There are no downstream dependencies to check; the price data lives in memory.
    """
    return {"status": "ok"}


@router.get("/test")
async def json_smoke_test() -> dict[str, object]:
    """Lets clients confirm they receive JSON from the API mount point."""
    return {"success": True, "message": "API is working correctly"}


__all__ = ["router"]
