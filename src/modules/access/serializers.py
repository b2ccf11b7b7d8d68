from __future__ import annotations

from rest_framework import serializers

from modules.access.models import Permission


class PermissionSerializer(serializers.ModelSerializer):
    class Meta:
        model = Permission
        fields = ["id", "name", "description"]
        read_only_fields = fields


class ReplacePermissionsSerializer(serializers.Serializer):
    # Plain strings: unknown or malformed ids are reported by the service
    # as ``NotFound(permission, id)``.
    permission_ids = serializers.ListField(
        child=serializers.CharField(), allow_empty=True
    )
