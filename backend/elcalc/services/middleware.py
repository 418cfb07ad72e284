"""Request tracing middleware: request ids, timing headers and one log line per call."""
import time
import uuid
import logging
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import Response

logger = logging.getLogger("elcalc-api.middleware")

SKIP_LOG_PATHS = {"/health"}
CALCULATION_ID_HEADER = "X-Calculation-ID"


class RequestTimingMiddleware(BaseHTTPMiddleware):
    """
    Sets X-Request-ID (an incoming header is reused) and X-Process-Time on
    every response, and logs method, path, status and duration for every
    request except health checks.

    Offer builders may tag a call with X-Calculation-ID; it is echoed back
    and carried on the request log line so API and engine logs for one
    calculation can be joined.
    """

    async def dispatch(self, request: Request, call_next) -> Response:
        request_id = request.headers.get("X-Request-ID") or str(uuid.uuid4())
        calculation_id = request.headers.get(CALCULATION_ID_HEADER)
        start_time = time.perf_counter()
        request.state.request_id = request_id
        request.state.calculation_id = calculation_id

        response: Response = await call_next(request)

        duration_ms = round((time.perf_counter() - start_time) * 1000, 2)
        response.headers["X-Request-ID"] = request_id
        response.headers["X-Process-Time"] = str(duration_ms)
        if calculation_id:
            response.headers[CALCULATION_ID_HEADER] = calculation_id

        if request.url.path not in SKIP_LOG_PATHS:
            logger.info(
                f"{request.method} {request.url.path} -> {response.status_code}",
                extra={
                    "http_method": request.method,
                    "http_path": request.url.path,
                    "http_status": response.status_code,
                    "request_id": request_id,
                    "calculation_id": calculation_id,
                    "duration_ms": duration_ms,
                },
            )

        return response
