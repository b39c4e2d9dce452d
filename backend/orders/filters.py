import django_filters

from .models import Order


class OrderFilter(django_filters.FilterSet):
    """Filters for a table's order history (``?status=PENDING``)."""

    status = django_filters.ChoiceFilter(choices=Order.OrderStatus.choices)
    created_at__gte = django_filters.DateTimeFilter(field_name="created_at", lookup_expr="gte")
    created_at__lte = django_filters.DateTimeFilter(field_name="created_at", lookup_expr="lte")

    class Meta:
        model = Order
        fields = ["status"]
