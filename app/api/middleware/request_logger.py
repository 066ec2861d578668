import time
import uuid
from fastapi import Request
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.types import ASGIApp
from app.utils.logger import get_logger

logger = get_logger("api")

# Polled by load balancers; logged at debug only
QUIET_PATHS = {"/", "/health"}


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    def __init__(self, app: ASGIApp):
        super().__init__(app)

    async def dispatch(self, request: Request, call_next):
        # Reuse the caller's request id so a data logger can correlate its own logs
        request_id = request.headers.get("X-Request-ID") or str(uuid.uuid4())
        request.state.request_id = request_id
        log = logger.debug if request.url.path in QUIET_PATHS else logger.info

        client_host = request.client.host if request.client else "unknown"
        query = f"?{request.url.query}" if request.url.query else ""
        log(
            f"Request received: {request.method} {request.url.path}{query} | "
            f"Client: {client_host} | ID: {request_id}"
        )

        start_time = time.perf_counter()
        try:
            response = await call_next(request)
        except Exception as e:
            process_time = time.perf_counter() - start_time
            logger.error(
                f"Request failed: {request.method} {request.url.path} | "
                f"Error: {str(e)} | Duration: {process_time:.4f}s | ID: {request_id}",
                exc_info=True
            )
            raise

        process_time = time.perf_counter() - start_time
        log(
            f"Request completed: {request.method} {request.url.path} | "
            f"Status: {response.status_code} | "
            f"Duration: {process_time:.4f}s | ID: {request_id}"
        )
        response.headers["X-Request-ID"] = request_id
        response.headers["X-Process-Time"] = f"{process_time:.4f}"
        return response
