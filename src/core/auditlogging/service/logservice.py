import time
from typing import Optional

from fastapi import Request
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.responses import Response
from loguru import logger


class APILoggingMiddleware(BaseHTTPMiddleware):
    """Access log for every request: method, path, status and processing time."""

    async def dispatch(self, request: Request, call_next) -> Response:
        start_time = time.perf_counter()
        try:
            response = await call_next(request)
        except Exception as e:
            self.log_request(request, None, time.perf_counter() - start_time, error=str(e))
            raise
        self.log_request(request, response, time.perf_counter() - start_time)
        return response

    @staticmethod
    def log_request(
        request: Request,
        response: Optional[Response],
        processing_time: float,
        error: Optional[str] = None
    ):
        client_host = request.client.host if request.client else "unknown"
        processing_ms = round(processing_time * 1000, 2)

        if error:
            logger.error(f"{request.method} {request.url.path} - Error: {error} ({processing_ms}ms, client={client_host})")
        else:
            logger.info(f"{request.method} {request.url.path} - {response.status_code} ({processing_ms}ms, client={client_host})")
