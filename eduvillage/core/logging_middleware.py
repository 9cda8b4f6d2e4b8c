import logging
import time

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request

logger = logging.getLogger("eduvillage.access")


def _level_for(status_code: int) -> int:
    if status_code >= 500:
        return logging.ERROR
    if status_code >= 400:
        return logging.WARNING
    return logging.INFO


class LoggingMiddleware(BaseHTTPMiddleware):
    """One access-log line per request: client, method, path, status, duration."""

    async def dispatch(self, request: Request, call_next):
        start = time.monotonic()
        response = await call_next(request)
        duration = time.monotonic() - start

        client = request.client.host if request.client else "-"
        logger.log(
            _level_for(response.status_code),
            "%s %s %s -> %s (%.3fs)",
            client,
            request.method,
            request.url.path,
            response.status_code,
            duration,
        )
        return response
