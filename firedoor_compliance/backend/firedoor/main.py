# backend/firedoor/main.py
from __future__ import annotations

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from .config import settings
from .logging_config import configure_logging
from .middleware.request_id import RequestIdMiddleware
from .middleware.structured_logging import StructuredLoggingMiddleware

from .routers.health import router as health_router
from .routers.meta import router as meta_router

from .routers.inspections import router as inspections_router
from .routers.doors import router as doors_router
from .routers.schedule import router as schedule_router
from .routers.defects import router as defects_router

API_PREFIX = "/api"


def _cors_origins() -> list[str]:
    val = getattr(settings, "cors_allow_origins", ["*"])
    if isinstance(val, str):
        v = val.strip()
        return ["*"] if v == "*" else [x.strip() for x in v.split(",") if x.strip()]
    if isinstance(val, list) and val:
        return val
    return ["*"]


def create_app() -> FastAPI:
    app = FastAPI(
        title="Fire Door Compliance Rules",
        version=getattr(settings, "rules_version", "dev"),
    )

    # Later middleware wraps earlier middleware: request id wraps the request log.
    app.add_middleware(StructuredLoggingMiddleware)
    app.add_middleware(RequestIdMiddleware)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=_cors_origins(),
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Core
    app.include_router(health_router, prefix=API_PREFIX)
    app.include_router(meta_router, prefix=API_PREFIX)

    # Rules
    app.include_router(inspections_router, prefix=API_PREFIX)
    app.include_router(doors_router, prefix=API_PREFIX)
    app.include_router(schedule_router, prefix=API_PREFIX)
    app.include_router(defects_router, prefix=API_PREFIX)

    return app


configure_logging()
app = create_app()
