import time
from typing import Any, Dict

import structlog
from django.db import DatabaseError, connections
from django.http import HttpRequest, JsonResponse
from django.utils import timezone
from rest_framework import status
from rest_framework.request import Request
from rest_framework.response import Response
from rest_framework.views import APIView

from modules.core.services import ReferenceEntityService
from modules.core.unit_of_work import DjangoUnitOfWork

logger = structlog.get_logger(__name__)


def _check_database(alias: str = "default") -> Dict[str, Any]:
    """Round-trip ``SELECT 1`` on *alias* and time it."""
    started = time.monotonic()
    try:
        connection = connections[alias]
        connection.ensure_connection()
        with connection.cursor() as cursor:
            cursor.execute("SELECT 1")
            cursor.fetchone()
    except DatabaseError:
        logger.error("health_check.database_down", alias=alias, exc_info=True)
        return {"status": "down"}
    elapsed_ms = (time.monotonic() - started) * 1000
    return {"status": "up", "response_time_ms": round(elapsed_ms, 2)}


def health_check(request: HttpRequest) -> JsonResponse:
    """Public liveness check; 503 when the database cannot be reached."""
    services = {"database": _check_database()}
    healthy = all(check["status"] == "up" for check in services.values())
    verdict = "healthy" if healthy else "unhealthy"
    logger.info("health_check.completed", status=verdict)
    return JsonResponse(
        {
            "status": verdict,
            "timestamp": timezone.now().isoformat(),
            "services": services,
        },
        status=200 if healthy else 503,
    )


class ReferenceEntityView(APIView):
    """DELETE /api/v1/references/{kind}/{id}/

    Guarded deletion of a status, category, warehouse, supplier,
    internal client, permission, role or item.  Errors (404, 409) come
    from the domain exception handler.
    """

    def delete(self, request: Request, kind: str, entity_id: str) -> Response:
        ReferenceEntityService(DjangoUnitOfWork()).delete(kind, entity_id)
        return Response(status=status.HTTP_204_NO_CONTENT)
