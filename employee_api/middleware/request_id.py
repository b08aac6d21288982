import time

from fastapi import Request, status
from fastapi.responses import JSONResponse
from starlette.middleware.base import BaseHTTPMiddleware

from ..core.constants import ErrorMessages, HttpHeaders
from ..core.logging import get_logger, set_request_id, start_upstream_trace

logger = get_logger(__name__)


class RequestIDMiddleware(BaseHTTPMiddleware):
    """Tags every request with a request id and an upstream call trace.

    The id comes from the inbound X-Request-ID header when present and is
    echoed back on the response. Each upstream call the handler makes is
    appended to the trace, which is summarised in the completion log line
    and in the X-Upstream-Calls response header.

    Errors no exception handler claimed are logged here with the upstream
    calls made so far and answered with 500.
    """

    async def dispatch(self, request: Request, call_next):
        request_id = set_request_id(request.headers.get(HttpHeaders.REQUEST_ID) or None)
        # Set before call_next so the handler task sees the same object
        trace = start_upstream_trace()

        logger.info(
            "Request started",
            extra={
                'method': request.method,
                'path': request.url.path
            }
        )

        start_time = time.time()

        try:
            response = await call_next(request)
        except Exception as e:
            logger.error(
                "Request failed",
                extra={
                    'method': request.method,
                    'path': request.url.path,
                    'error_type': type(e).__name__,
                    'process_time': time.time() - start_time,
                    **trace.as_log_fields()
                },
                exc_info=True
            )

            return JSONResponse(
                status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                content={
                    "error": ErrorMessages.INTERNAL_SERVER_ERROR,
                    "request_id": request_id
                },
                headers={
                    HttpHeaders.REQUEST_ID: request_id,
                    HttpHeaders.UPSTREAM_CALLS: str(trace.call_count)
                }
            )

        process_time = time.time() - start_time

        response.headers[HttpHeaders.REQUEST_ID] = request_id
        response.headers[HttpHeaders.PROCESS_TIME] = str(process_time)
        response.headers[HttpHeaders.UPSTREAM_CALLS] = str(trace.call_count)

        log = logger.warning if response.status_code >= status.HTTP_500_INTERNAL_SERVER_ERROR else logger.info
        log(
            "Request completed",
            extra={
                'method': request.method,
                'path': request.url.path,
                'status_code': response.status_code,
                'process_time': process_time,
                **trace.as_log_fields()
            }
        )

        return response
