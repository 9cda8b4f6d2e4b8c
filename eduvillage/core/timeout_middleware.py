import asyncio
import logging

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import JSONResponse

from eduvillage.core.error_handlers import error_body
from eduvillage.core.errors import RequestTimeoutError

logger = logging.getLogger(__name__)


class TimeoutMiddleware(BaseHTTPMiddleware):
    """
    Answers 504 once ``timeout`` seconds pass. A sync handler still running
    in the threadpool cannot be cancelled; its session refuses to commit
    past the same deadline (see ``eduvillage.db.session``).
    """

    def __init__(self, app, timeout: float):
        super().__init__(app)
        self.timeout = timeout

    async def dispatch(self, request: Request, call_next):
        try:
            return await asyncio.wait_for(call_next(request), timeout=self.timeout)
        except asyncio.TimeoutError:
            logger.warning(
                "%s %s timed out after %.1fs",
                request.method,
                request.url.path,
                self.timeout,
            )
            exc = RequestTimeoutError()
            return JSONResponse(
                status_code=exc.status_code,
                content=error_body(exc.message),
            )
