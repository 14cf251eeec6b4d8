"""DRF exception handler producing the project's standard error body.

Every error response has the shape::

    {"type": "client_error" | "server_error",
     "errors": [{"code": ..., "detail": ..., "attr": ...}]}

``InfrastructureError`` raised by a service becomes a 503 whose body does
not leak the underlying cause; the cause is logged instead.
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional

import structlog
from rest_framework import status
from rest_framework.exceptions import APIException
from rest_framework.response import Response
from rest_framework.views import exception_handler as drf_exception_handler

from shared.domain.exceptions import InfrastructureError

logger = structlog.get_logger(__name__)


def _flatten(detail: Any, attr: Optional[str] = None) -> List[Dict[str, Any]]:
    if isinstance(detail, dict):
        errors: List[Dict[str, Any]] = []
        for key, value in detail.items():
            errors.extend(_flatten(value, key if attr is None else f"{attr}.{key}"))
        return errors
    if isinstance(detail, list):
        errors = []
        for item in detail:
            errors.extend(_flatten(item, attr))
        return errors
    return [
        {
            "code": getattr(detail, "code", "error"),
            "detail": str(detail),
            "attr": attr,
        }
    ]


def standard_exception_handler(exc: Exception, context: Dict[str, Any]) -> Optional[Response]:
    if isinstance(exc, InfrastructureError):
        view = context.get("view")
        logger.error(
            "api.infrastructure_error",
            view=type(view).__name__ if view is not None else None,
            error=str(exc),
            cause=repr(exc.cause) if exc.cause is not None else None,
        )
        return Response(
            {
                "type": "server_error",
                "errors": [
                    {
                        "code": "service_unavailable",
                        "detail": "The request could not be processed. Try again later.",
                        "attr": None,
                    }
                ],
            },
            status=status.HTTP_503_SERVICE_UNAVAILABLE,
        )

    response = drf_exception_handler(exc, context)
    if response is None:
        return None

    if isinstance(exc, APIException):
        errors = _flatten(exc.detail)
    else:
        errors = [{"code": "error", "detail": str(exc), "attr": None}]

    response.data = {
        "type": "client_error" if response.status_code < 500 else "server_error",
        "errors": errors,
    }
    return response
