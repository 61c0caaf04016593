"""One structured log line per handled request."""

import logging
import time

from starlette.middleware.base import BaseHTTPMiddleware

logger = logging.getLogger("api.request")


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    async def dispatch(self, request, call_next):
        started = time.perf_counter()
        try:
            response = await call_next(request)
        except Exception:
            logger.exception("Unhandled error", extra={
                "method": request.method,
                "path": request.url.path,
            })
            raise

        duration_ms = round((time.perf_counter() - started) * 1000, 1)
        log = logger.warning if response.status_code >= 500 else logger.info
        log("Request handled", extra={
            "method": request.method,
            "path": request.url.path,
            "status": response.status_code,
            "durationMs": duration_ms,
        })
        return response
