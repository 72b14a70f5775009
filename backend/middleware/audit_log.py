"""
Audit Logging Middleware

One log line per payroll API call: method, path, status, latency and the
deployment instance. Payroll figures never reach this log.
"""

import logging
import time

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import Response

from backend.config import get_settings

logger = logging.getLogger("audit")

UNAUDITED_PATHS = {"/health", "/favicon.ico"}


class AuditLogMiddleware(BaseHTTPMiddleware):
    async def dispatch(self, request: Request, call_next) -> Response:
        if request.url.path in UNAUDITED_PATHS:
            return await call_next(request)

        started = time.monotonic()
        status_code = 500
        try:
            response = await call_next(request)
            status_code = response.status_code
            return response
        finally:
            entry = {
                "method": request.method,
                "path": request.url.path,
                "status": status_code,
                "latency_ms": round((time.monotonic() - started) * 1000, 2),
                "instance": get_settings().instance,
            }
            if status_code >= 500:
                level = logging.ERROR
            elif status_code >= 400:
                level = logging.WARNING
            else:
                level = logging.INFO
            logger.log(level, "payroll_request", extra=entry)
