import django_filters
from django.db.models import QuerySet

from .models import Order
from .selectors import search_orders


class AdminOrderFilterSet(django_filters.FilterSet):
    keyword = django_filters.CharFilter(method="filter_keyword")
    is_paid = django_filters.BooleanFilter()
    is_delivered = django_filters.BooleanFilter()
    is_cancelled = django_filters.BooleanFilter()

    class Meta:
        model = Order
        fields = ["keyword", "is_paid", "is_delivered", "is_cancelled"]

    def filter_keyword(self, queryset: QuerySet[Order], name, value):
        return queryset.filter(pk__in=search_orders(keyword=value).values("pk"))
