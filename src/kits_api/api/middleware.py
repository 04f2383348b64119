import time
import logging
from uuid import uuid4
from fastapi import Request

logger = logging.getLogger("kits_api.api")

REQUEST_ID_HEADER = "x-request-id"


def request_id_of(request: Request) -> str | None:
    return getattr(request.state, "request_id", None)


async def assign_request_id(request: Request, call_next):
    request.state.request_id = request.headers.get(REQUEST_ID_HEADER) or uuid4().hex
    response = await call_next(request)
    response.headers.setdefault(REQUEST_ID_HEADER, request.state.request_id)
    return response


async def log_kit_requests(request: Request, call_next):
    """One line per call: route, tenant email (when given), status and timing."""
    start = time.perf_counter()
    status = 500
    try:
        response = await call_next(request)
        status = response.status_code
        return response
    finally:
        duration_ms = round((time.perf_counter() - start) * 1000, 2)
        tenant = (request.query_params.get("email") or "").strip() or "-"
        level = logging.WARNING if status >= 500 else logging.INFO
        logger.log(
            level,
            f"{request.method} {request.url.path} tenant={tenant} -> {status} ({duration_ms} ms)",
            extra={
                "path": request.url.path,
                "tenant": tenant,
                "status": status,
                "duration_ms": duration_ms,
                "request_id": request_id_of(request),
            },
        )
