from __future__ import annotations

import json
import logging
from time import perf_counter
from uuid import uuid4

from fastapi import Request
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.responses import JSONResponse, Response

from brewmaster.services.observability import observability_tracker

logger = logging.getLogger("brewmaster.request")


def _route_template(request: Request) -> str:
    route = request.scope.get("route")
    return getattr(route, "path", None) or request.url.path


class ObservabilityMiddleware(BaseHTTPMiddleware):
    """Tags every request with an id, times it and logs one JSON line."""

    async def dispatch(self, request: Request, call_next) -> Response:  # type: ignore[override]
        request_id = request.headers.get("X-Request-ID") or uuid4().hex
        request.state.request_id = request_id
        started = perf_counter()
        error: Exception | None = None

        try:
            response = await call_next(request)
        except Exception as exc:
            error = exc
            response = JSONResponse(
                status_code=500,
                content={"detail": "Internal server error", "request_id": request_id},
            )

        duration_ms = (perf_counter() - started) * 1000
        path = _route_template(request)
        observability_tracker.record(
            method=request.method,
            path=path,
            status_code=response.status_code,
            duration_ms=duration_ms,
        )

        payload = json.dumps(
            {
                "event": "request_error" if error else "request_completed",
                "request_id": request_id,
                "method": request.method,
                "path": path,
                "status_code": response.status_code,
                "duration_ms": round(duration_ms, 2),
            }
        )
        if error is not None:
            logger.error(payload, exc_info=error)
        elif response.status_code >= 500:
            logger.error(payload)
        elif response.status_code >= 400:
            logger.warning(payload)
        else:
            logger.info(payload)

        response.headers["X-Request-ID"] = request_id
        return response
