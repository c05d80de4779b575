import django_filters
from django.db.models import Q

from .models import Order
from .status import OrderStatus, TransportMode


class OrderFilter(django_filters.FilterSet):
    status         = django_filters.ChoiceFilter(choices=OrderStatus.choices)
    transport_mode = django_filters.ChoiceFilter(choices=TransportMode.choices)
    search         = django_filters.CharFilter(method="filter_search")
    date_from      = django_filters.DateFilter(field_name="created_at", lookup_expr="date__gte")
    date_to        = django_filters.DateFilter(field_name="created_at", lookup_expr="date__lte")

    class Meta:
        model  = Order
        fields = ["status", "transport_mode", "urgent_delivery"]

    def filter_search(self, queryset, name, value):
        value = value.strip()
        if not value:
            return queryset
        return queryset.filter(
            Q(order_number__icontains=value)
            | Q(tracking_number__icontains=value)
            | Q(package_description__icontains=value)
            | Q(pickup_address__icontains=value)
            | Q(delivery_address__icontains=value)
            | Q(customer__email__icontains=value)
            | Q(customer__first_name__icontains=value)
            | Q(customer__last_name__icontains=value)
        )
