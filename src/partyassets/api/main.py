import logging
from pathlib import Path
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from partyassets.config import settings
from partyassets.exceptions import DataSourceError
from partyassets.api.middleware import request_context

# Routers
from partyassets.api.routers import imports, system

# Configure logging
logging.basicConfig(level=getattr(logging, settings.logging.level.upper(), logging.INFO))
logger = logging.getLogger("partyassets.api")


def _error_payload(request: Request, payload: dict) -> dict:
    rid = getattr(request.state, "request_id", None)
    if rid:
        payload["request_id"] = rid
    return payload


def create_app(db_path: Optional[Path] = None) -> FastAPI:
    """
    Factory to build the FastAPI application.
    Passing db_path points the shared database dependency at another file (used in tests).
    """
    if db_path:
        settings.paths.db_path = db_path
        import partyassets.api.deps as deps
        deps._db_instance = None  # reset global instance

    app = FastAPI(title="Party Assets API", version=settings.app.version)

    app.middleware("http")(request_context)

    app.include_router(system.router)
    if settings.pr3import.enabled:
        app.include_router(imports.router)
    else:
        logger.info("pr3 import disabled, import routes not mounted")

    @app.exception_handler(Exception)
    async def unhandled_exception_handler(request: Request, exc: Exception):
        if isinstance(exc, StarletteHTTPException):
            return JSONResponse(status_code=exc.status_code, content={"detail": exc.detail})

        logger.exception(
            "Unhandled error",
            extra={"path": str(request.url), "request_id": getattr(request.state, "request_id", None)},
        )
        payload = {"error": "internal_error", "detail": "Unexpected server error"}
        return JSONResponse(status_code=500, content=_error_payload(request, payload))

    @app.exception_handler(DataSourceError)
    async def datasource_exception_handler(request: Request, exc: DataSourceError):
        payload = {"error": "invalid_source", "detail": str(exc)}
        return JSONResponse(status_code=422, content=_error_payload(request, payload))

    return app


# Module-level app for uvicorn entrypoint
app = create_app()
