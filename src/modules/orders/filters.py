import django_filters

from modules.orders.models import Order


class OrderFilter(django_filters.FilterSet):
    status = django_filters.CharFilter(field_name="status__label", lookup_expr="iexact")
    status_id = django_filters.UUIDFilter(field_name="status_id")
    client = django_filters.UUIDFilter(field_name="client_id")
    placed_from = django_filters.IsoDateTimeFilter(field_name="placed_at", lookup_expr="gte")
    placed_to = django_filters.IsoDateTimeFilter(field_name="placed_at", lookup_expr="lte")
    open = django_filters.BooleanFilter(field_name="closed_at", lookup_expr="isnull")

    class Meta:
        model = Order
        fields = ["status", "status_id", "client", "placed_from", "placed_to", "open"]
