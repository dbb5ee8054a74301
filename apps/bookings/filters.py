"""FilterSet definitions for the booking listing."""

from __future__ import annotations

import django_filters  # type: ignore

from .models import Booking

ALL_STATUSES = "all"


class BookingFilterSet(django_filters.FilterSet):
    """
    FilterSet for Booking used by the back office listing

    ``status=all`` is the same as leaving the status out. ``start_date``
    and ``end_date`` bound the pickup day, both inclusive.
    """

    status = django_filters.ChoiceFilter(
        choices=[(ALL_STATUSES, "All")] + list(Booking.Status.choices),
        method="filter_status",
    )
    start_date = django_filters.DateFilter(field_name="pickup_date", lookup_expr="date__gte")
    end_date = django_filters.DateFilter(field_name="pickup_date", lookup_expr="date__lte")

    class Meta:
        model = Booking
        fields = ["status"]

    def filter_status(self, queryset, name, value):  # type: ignore
        if not value or value == ALL_STATUSES:
            return queryset
        return queryset.filter(status=value)
