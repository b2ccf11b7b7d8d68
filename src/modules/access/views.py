"""Role -> permission grant endpoints."""

from __future__ import annotations

from rest_framework import status
from rest_framework.request import Request
from rest_framework.response import Response
from rest_framework.views import APIView

from modules.access.dtos import ReplacePermissionsDTO
from modules.access.serializers import PermissionSerializer, ReplacePermissionsSerializer
from modules.access.services import RolePermissionService
from modules.core.unit_of_work import DjangoUnitOfWork


class RolePermissionsView(APIView):
    """GET / PUT /api/v1/roles/{role_id}/permissions/"""

    def _service(self) -> RolePermissionService:
        return RolePermissionService(DjangoUnitOfWork())

    def get(self, request: Request, role_id: str) -> Response:
        permissions = self._service().list_permissions(role_id)
        return Response(PermissionSerializer(permissions, many=True).data)

    def put(self, request: Request, role_id: str) -> Response:
        serializer = ReplacePermissionsSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        dto = ReplacePermissionsDTO(**serializer.validated_data)

        service = self._service()
        service.replace_all(role_id, dto.permission_ids)
        permissions = service.list_permissions(role_id)
        return Response(PermissionSerializer(permissions, many=True).data)


class RolePermissionDetailView(APIView):
    """POST / DELETE /api/v1/roles/{role_id}/permissions/{permission_id}/"""

    def post(self, request: Request, role_id: str, permission_id: str) -> Response:
        RolePermissionService(DjangoUnitOfWork()).grant(role_id, permission_id)
        return Response(status=status.HTTP_201_CREATED)

    def delete(self, request: Request, role_id: str, permission_id: str) -> Response:
        RolePermissionService(DjangoUnitOfWork()).revoke(role_id, permission_id)
        return Response(status=status.HTTP_204_NO_CONTENT)
