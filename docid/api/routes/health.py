"""GET /health — liveness check."""
from __future__ import annotations

from fastapi import APIRouter

from docid.core.settings import get_settings
from docid.doctypes.registry import REGISTRY

router = APIRouter(tags=["health"])


@router.get("/health", summary="Basic health check")
def health_check() -> dict[str, str | int]:
    settings = get_settings()
    return {
        "status": "ok",
        "service": settings.app_name,
        "version": settings.app_version,
        "environment": settings.app_env,
        "doc_types": len(REGISTRY),
    }
