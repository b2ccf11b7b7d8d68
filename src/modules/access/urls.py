from django.urls import path

from modules.access.views import RolePermissionDetailView, RolePermissionsView

urlpatterns = [
    path(
        "roles/<str:role_id>/permissions/",
        RolePermissionsView.as_view(),
        name="role_permissions",
    ),
    path(
        "roles/<str:role_id>/permissions/<str:permission_id>/",
        RolePermissionDetailView.as_view(),
        name="role_permission_detail",
    ),
]
