"""Fleet persistence models."""

from __future__ import annotations

import uuid
from decimal import Decimal

from django.core.validators import MinValueValidator  # type: ignore
from django.db import models  # type: ignore
from django.utils.translation import gettext_lazy as _  # type: ignore


class Car(models.Model):
    """A rentable vehicle."""

    class Status(models.TextChoices):
        ACTIVE = "active", _("Active")
        MAINTENANCE = "maintenance", _("Maintenance")
        INACTIVE = "inactive", _("Inactive")

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    name = models.CharField(max_length=255)
    category = models.CharField(max_length=100, blank=True)
    make = models.CharField(max_length=100, null=True, blank=True)
    model = models.CharField(max_length=100, null=True, blank=True)
    year = models.PositiveSmallIntegerField(null=True, blank=True)
    fuel_type = models.CharField(max_length=50, blank=True)
    seats = models.PositiveSmallIntegerField(default=4, validators=[MinValueValidator(1)])
    luggage = models.PositiveSmallIntegerField(default=0)
    price_per_day = models.DecimalField(
        max_digits=10,
        decimal_places=2,
        default=Decimal("0.00"),
        validators=[MinValueValidator(Decimal("0.00"))],
    )
    status = models.CharField(
        max_length=20,
        choices=Status.choices,
        default=Status.ACTIVE,
    )
    features = models.JSONField(default=list, blank=True)
    images = models.JSONField(default=list, blank=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        verbose_name = _("Car")
        verbose_name_plural = _("Cars")
        ordering = ["-created_at"]
        constraints = [
            models.CheckConstraint(
                condition=models.Q(status__in=["active", "maintenance", "inactive"]),
                name="car_valid_status",
            ),
            models.CheckConstraint(
                condition=models.Q(price_per_day__gte=0),
                name="car_price_not_negative",
            ),
            models.CheckConstraint(
                condition=models.Q(seats__gte=1),
                name="car_seats_positive",
            ),
        ]
        indexes = [
            models.Index(fields=["status"], name="car_status_idx"),
        ]

    def __str__(self) -> str:
        return self.name or f"{self.make} {self.model}"
