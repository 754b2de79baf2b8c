"""Request tracing middleware: request id, latency histogram and access log"""

import uuid
import time
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from budget_tracker.infrastructure.observability.logging import log_request
from budget_tracker.infrastructure.observability.metrics import request_duration_histogram

REQUEST_ID_HEADER = "X-Request-ID"


class RequestTracingMiddleware(BaseHTTPMiddleware):
    """
    Tag each request with an id and record how long it took.

    An incoming X-Request-ID is kept so ids can be correlated with the caller;
    otherwise a new UUID is issued. The id is echoed on the response.
    """

    async def dispatch(self, request: Request, call_next):
        request_id = request.headers.get(REQUEST_ID_HEADER) or str(uuid.uuid4())
        request.state.request_id = request_id
        started = time.perf_counter()

        response = await call_next(request)

        duration = time.perf_counter() - started
        request_duration_histogram.labels(
            method=request.method,
            endpoint=request.url.path,
            status=response.status_code,
        ).observe(duration)
        log_request(request_id, request.method, request.url.path, response.status_code, duration * 1000)

        response.headers[REQUEST_ID_HEADER] = request_id
        return response
