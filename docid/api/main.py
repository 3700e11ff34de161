"""FastAPI application factory.

Assembles the health, document-type, classification and suite routers.
This module is the authoritative app object; docid/main.py re-exports it.
"""
from __future__ import annotations

from contextlib import asynccontextmanager

from fastapi import FastAPI

from docid.api.routes.classify import router as classify_router
from docid.api.routes.doc_types import router as doc_types_router
from docid.api.routes.health import router as health_router
from docid.api.routes.suites import router as suites_router
from docid.core.logging import setup_logging
from docid.core.settings import get_settings


@asynccontextmanager
async def lifespan(_: FastAPI):
    setup_logging()
    yield


settings = get_settings()

app = FastAPI(
    title=settings.app_name,
    version=settings.app_version,
    lifespan=lifespan,
)

app.include_router(health_router)
app.include_router(doc_types_router)
app.include_router(classify_router)
app.include_router(suites_router)
