"""Booking persistence models."""

from __future__ import annotations

import uuid
from decimal import Decimal

from django.core.validators import MinValueValidator  # type: ignore
from django.db import models  # type: ignore
from django.utils.translation import gettext_lazy as _  # type: ignore


class Booking(models.Model):
    """A car reservation submitted through the public booking flow."""

    class Status(models.TextChoices):
        PENDING = "pending", _("Pending")
        CONFIRMED = "confirmed", _("Confirmed")
        COMPLETED = "completed", _("Completed")
        CANCELLED = "cancelled", _("Cancelled")

    class TripType(models.TextChoices):
        ONE_WAY = "oneWay", _("One way")
        ROUND_TRIP = "roundTrip", _("Round trip")

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    trip_type = models.CharField(
        max_length=16,
        choices=TripType.choices,
        default=TripType.ONE_WAY,
    )
    pickup_location = models.CharField(max_length=255)
    dropoff_location = models.CharField(max_length=255, blank=True)
    pickup_date = models.DateTimeField()
    return_pickup_location = models.CharField(max_length=255, null=True, blank=True)
    return_dropoff_location = models.CharField(max_length=255, null=True, blank=True)
    return_date = models.DateTimeField(null=True, blank=True)
    passengers = models.PositiveSmallIntegerField(default=1, validators=[MinValueValidator(1)])
    car = models.ForeignKey(
        "fleet.Car",
        on_delete=models.PROTECT,
        related_name="bookings",
    )
    full_name = models.CharField(max_length=255)
    email = models.EmailField()
    phone = models.CharField(max_length=50)
    notes = models.TextField(blank=True)
    status = models.CharField(
        max_length=20,
        choices=Status.choices,
        default=Status.PENDING,
    )
    total_price = models.DecimalField(
        max_digits=12,
        decimal_places=2,
        default=Decimal("0.00"),
        validators=[MinValueValidator(Decimal("0.00"))],
    )
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        verbose_name = _("Booking")
        verbose_name_plural = _("Bookings")
        ordering = ["-created_at"]
        constraints = [
            models.CheckConstraint(
                condition=models.Q(status__in=["pending", "confirmed", "completed", "cancelled"]),
                name="booking_valid_status",
            ),
            models.CheckConstraint(
                condition=(
                    models.Q(
                        trip_type="roundTrip",
                        return_pickup_location__isnull=False,
                        return_dropoff_location__isnull=False,
                        return_date__isnull=False,
                    )
                    | models.Q(
                        trip_type="oneWay",
                        return_pickup_location__isnull=True,
                        return_dropoff_location__isnull=True,
                        return_date__isnull=True,
                    )
                ),
                name="booking_return_fields_match_trip_type",
            ),
            models.CheckConstraint(
                condition=models.Q(total_price__gte=0),
                name="booking_total_not_negative",
            ),
            models.CheckConstraint(
                condition=models.Q(passengers__gte=1),
                name="booking_passengers_positive",
            ),
        ]
        indexes = [
            models.Index(fields=["created_at"], name="booking_created_at_idx"),
            models.Index(fields=["status"], name="booking_status_idx"),
        ]

    def __str__(self) -> str:
        return f"Booking {self.id} for {self.car_id}"
