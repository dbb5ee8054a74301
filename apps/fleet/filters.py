"""FilterSet definitions for the car listing."""

from __future__ import annotations

import django_filters  # type: ignore

from .models import Car

FEATURED_LIMIT = 3


class CarFilterSet(django_filters.FilterSet):
    """FilterSet for Car used by the public listing."""

    status = django_filters.ChoiceFilter(field_name="status", choices=Car.Status.choices)
    category = django_filters.CharFilter(field_name="category", lookup_expr="iexact")

    # featured=true keeps the most expensive active cars
    featured = django_filters.BooleanFilter(method="filter_featured")

    class Meta:
        model = Car
        fields = ["status", "category"]

    def filter_featured(self, queryset, name, value):  # type: ignore
        if not value:
            return queryset
        featured_ids = list(
            queryset.filter(status=Car.Status.ACTIVE)
            .order_by("-price_per_day", "id")
            .values_list("id", flat=True)[:FEATURED_LIMIT]
        )
        return queryset.filter(id__in=featured_ids).order_by("-price_per_day", "id")
