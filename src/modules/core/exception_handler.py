"""DRF exception handler producing one error shape for every failure.

Body::

    {"type": "client_error" | "validation_error" | "server_error",
     "errors": [{"code": ..., "detail": ..., "attr": ...}]}

Domain errors map to HTTP by their ``code``; DRF's own exceptions keep
their status and are reshaped.  Anything else is left to Django (500).
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional

import structlog
from pydantic import ValidationError as PydanticValidationError
from rest_framework import status
from rest_framework.exceptions import ValidationError
from rest_framework.response import Response
from rest_framework.views import exception_handler

from modules.core.exceptions import DomainError

logger = structlog.get_logger(__name__)

DOMAIN_STATUS_CODES: Dict[str, int] = {
    "not_found": status.HTTP_404_NOT_FOUND,
    "invalid_order": status.HTTP_400_BAD_REQUEST,
    "invalid_data": status.HTTP_400_BAD_REQUEST,
    "insufficient_stock": status.HTTP_409_CONFLICT,
    "resource_in_use": status.HTTP_409_CONFLICT,
    "duplicate_resource": status.HTTP_409_CONFLICT,
    "illegal_operation": status.HTTP_409_CONFLICT,
    "already_granted": status.HTTP_409_CONFLICT,
}

# Structured attributes copied into ``meta`` for callers.
_META_FIELDS = (
    "kind",
    "id",
    "key",
    "item_id",
    "available",
    "requested",
    "blocking_dependent_kind",
    "role_id",
    "permission_id",
)


def _error(code: str, detail: str, attr: Optional[str] = None) -> Dict[str, Any]:
    return {"code": code, "detail": detail, "attr": attr}


def _flatten(detail: Any, prefix: Optional[str] = None) -> List[Dict[str, Any]]:
    if isinstance(detail, dict):
        errors = []
        for key, value in detail.items():
            attr = key if prefix is None else f"{prefix}.{key}"
            if key == "non_field_errors":
                attr = prefix
            errors.extend(_flatten(value, attr))
        return errors
    if isinstance(detail, list):
        errors = []
        for index, value in enumerate(detail):
            if isinstance(value, (dict, list)):
                errors.extend(_flatten(value, f"{prefix}.{index}" if prefix else str(index)))
            else:
                errors.extend(_flatten(value, prefix))
        return errors
    return [_error(getattr(detail, "code", "invalid"), str(detail), prefix)]


def domain_exception_handler(exc: Exception, context: Dict[str, Any]) -> Optional[Response]:
    if isinstance(exc, DomainError):
        http_status = DOMAIN_STATUS_CODES.get(exc.code, status.HTTP_400_BAD_REQUEST)
        error = _error(exc.code, str(exc))
        meta = {
            field: str(getattr(exc, field))
            for field in _META_FIELDS
            if getattr(exc, field, None) is not None
        }
        if meta:
            error["meta"] = meta
        logger.info("api.domain_error", code=exc.code, status_code=http_status)
        return Response({"type": "client_error", "errors": [error]}, status=http_status)

    if isinstance(exc, PydanticValidationError):
        errors = [
            _error(
                err["type"],
                err["msg"],
                ".".join(str(p) for p in err["loc"]) or None,
            )
            for err in exc.errors()
        ]
        return Response(
            {"type": "validation_error", "errors": errors},
            status=status.HTTP_400_BAD_REQUEST,
        )

    response = exception_handler(exc, context)
    if response is None:
        return None

    if isinstance(exc, ValidationError):
        response.data = {"type": "validation_error", "errors": _flatten(response.data)}
        return response

    detail = response.data
    if isinstance(detail, dict):
        detail = detail.get("detail", detail)
    error_type = "server_error" if response.status_code >= 500 else "client_error"
    code = getattr(detail, "code", None) or getattr(exc, "default_code", "error")
    response.data = {"type": error_type, "errors": [_error(code, str(detail))]}
    return response
