from django.urls import path

from modules.core.views import ReferenceEntityView, health_check

urlpatterns = [
    path("health", health_check, name="health_check"),
    path(
        "api/v1/references/<str:kind>/<str:entity_id>/",
        ReferenceEntityView.as_view(),
        name="reference_delete",
    ),
]
