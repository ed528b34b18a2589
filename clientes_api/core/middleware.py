from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from typing import Callable
import logging
import time
import uuid

logger = logging.getLogger(__name__)

REQUEST_ID_HEADER = "X-Request-ID"

class RequestLoggingMiddleware(BaseHTTPMiddleware):
    async def dispatch(self, request: Request, call_next: Callable):
        endpoint = request.url.path
        method = request.method

        # Keep the caller's request id when one is sent
        request_id = request.headers.get(REQUEST_ID_HEADER) or uuid.uuid4().hex

        start = time.perf_counter()
        try:
            response = await call_next(request)
        except Exception:
            elapsed_ms = (time.perf_counter() - start) * 1000
            logger.error(f"[{request_id}] {method} {endpoint} failed after {elapsed_ms:.1f}ms")
            raise

        elapsed_ms = (time.perf_counter() - start) * 1000
        logger.info(f"[{request_id}] {method} {endpoint} -> {response.status_code} ({elapsed_ms:.1f}ms)")

        response.headers[REQUEST_ID_HEADER] = request_id
        return response
