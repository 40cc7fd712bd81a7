"""
Custom middleware for the FastAPI application.

Every request gets a request id, echoed in the X-Request-ID response header
and included in request and error logs. Kiosks and other callers may send
their own X-Request-ID to correlate their logs with ours.
"""
import time
import logging
from fastapi import Request
from starlette.middleware.base import BaseHTTPMiddleware
import uuid

# Set up logging
logger = logging.getLogger(__name__)

REQUEST_ID_HEADER = "X-Request-ID"

# Polled by monitoring; logged at DEBUG only
QUIET_PATHS = {"/health"}

def request_id_of(request: Request) -> str:
    """Request id assigned by RequestLoggingMiddleware, or "-" outside of it."""
    return getattr(request.state, "request_id", "-")

class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """
    Middleware for logging request and response information.
    """
    async def dispatch(self, request: Request, call_next):
        request_id = request.headers.get(REQUEST_ID_HEADER) or str(uuid.uuid4())
        request.state.request_id = request_id

        log_level = logging.DEBUG if request.url.path in QUIET_PATHS else logging.INFO
        client_host = request.client.host if request.client else "unknown"
        logger.log(log_level, f"[{request_id}] {request.method} {request.url.path} from {client_host}")

        start_time = time.perf_counter()
        try:
            response = await call_next(request)
        except Exception as e:
            logger.error(
                f"[{request_id}] {request.method} {request.url.path} failed after "
                f"{time.perf_counter() - start_time:.4f}s: {e}"
            )
            raise

        process_time = time.perf_counter() - start_time
        response.headers["X-Process-Time"] = f"{process_time:.4f}"
        response.headers[REQUEST_ID_HEADER] = request_id

        logger.log(
            log_level,
            f"[{request_id}] {request.method} {request.url.path} -> {response.status_code} in {process_time:.4f}s"
        )
        return response


def setup_middlewares(app):
    """
    Set up all custom middlewares for the application.

    Args:
        app: FastAPI application instance
    """
    app.add_middleware(RequestLoggingMiddleware)
