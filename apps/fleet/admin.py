"""Admin registration for cars."""

from __future__ import annotations

from django.contrib import admin

from .models import Car


@admin.register(Car)
class CarAdmin(admin.ModelAdmin):
    list_display = (
        "name",
        "make",
        "model",
        "year",
        "category",
        "status",
        "price_per_day",
        "created_at",
    )
    list_filter = ("status", "category", "fuel_type")
    search_fields = ("name", "make", "model")
    readonly_fields = ("id", "created_at", "updated_at")
