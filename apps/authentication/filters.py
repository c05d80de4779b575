import django_filters
from django.contrib.auth import get_user_model
from django.db.models import Q

Account = get_user_model()


class AccountFilter(django_filters.FilterSet):
    role   = django_filters.ChoiceFilter(choices=Account.Role.choices)
    status = django_filters.ChoiceFilter(choices=Account.Status.choices)
    search = django_filters.CharFilter(method="filter_search")

    class Meta:
        model  = Account
        fields = ["role", "status"]

    def filter_search(self, queryset, name, value):
        value = value.strip()
        if not value:
            return queryset
        return queryset.filter(
            Q(email__icontains=value)
            | Q(first_name__icontains=value)
            | Q(last_name__icontains=value)
            | Q(phone__icontains=value)
        )
