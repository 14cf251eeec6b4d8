import uuid
from typing import Callable, Optional

import structlog
from django.http import HttpRequest, HttpResponse

logger = structlog.get_logger()


def bind_correlation_id(cid: Optional[str] = None) -> str:
    """Reset the structlog context and bind ``cid`` (or a new UUID4) to it.

    Shared by the HTTP middleware and the Celery ``task_prerun`` hook so
    that log lines of one request or one message carry the same id.
    """
    cid = cid or str(uuid.uuid4())
    structlog.contextvars.clear_contextvars()
    structlog.contextvars.bind_contextvars(correlation_id=cid)
    return cid


class CorrelationIdMiddleware:
    """Middleware that extracts or generates a correlation ID for each request.

    Reads the X-Request-ID header; when absent a UUID4 is generated.  The ID
    is bound to the structlog context and echoed back in the X-Request-ID
    response header.
    """

    def __init__(self, get_response: Callable[[HttpRequest], HttpResponse]) -> None:
        self.get_response = get_response

    def __call__(self, request: HttpRequest) -> HttpResponse:
        cid = bind_correlation_id(request.META.get("HTTP_X_REQUEST_ID"))

        logger.info(
            "request_started",
            method=request.method,
            path=request.get_full_path(),
        )

        response = self.get_response(request)

        logger.info(
            "request_finished",
            method=request.method,
            path=request.get_full_path(),
            status_code=response.status_code,
        )

        response["X-Request-ID"] = cid
        return response
