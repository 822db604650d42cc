import logging
import time
from uuid import uuid4

from fastapi import Request

from partyassets.config import settings

logger = logging.getLogger("partyassets.api")

REQUEST_ID_HEADER = "x-request-id"


async def request_context(request: Request, call_next):
    """
    Tags every request with an id (taken from the caller when present) and,
    when enabled, logs method, path, status, upload size and duration.
    """
    rid = request.headers.get(REQUEST_ID_HEADER) or uuid4().hex
    request.state.request_id = rid
    start = time.perf_counter()
    status = "error"
    try:
        response = await call_next(request)
        status = response.status_code
        response.headers[REQUEST_ID_HEADER] = rid
        return response
    finally:
        if settings.logging.log_requests:
            logger.info(
                "request",
                extra={
                    "method": request.method,
                    "path": request.url.path,
                    "status": status,
                    "content_length": request.headers.get("content-length"),
                    "duration_ms": round((time.perf_counter() - start) * 1000, 2),
                    "request_id": rid,
                },
            )
