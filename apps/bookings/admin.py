"""Admin registration for bookings."""

from __future__ import annotations

from django.contrib import admin

from .models import Booking


@admin.register(Booking)
class BookingAdmin(admin.ModelAdmin):
    list_display = (
        "id",
        "car",
        "full_name",
        "trip_type",
        "status",
        "pickup_date",
        "return_date",
        "total_price",
        "created_at",
    )
    list_filter = ("status", "trip_type", "pickup_date")
    search_fields = ("full_name", "email", "phone", "car__name")
    list_select_related = ("car",)
    readonly_fields = (
        "id",
        "created_at",
        "updated_at",
    )
