import decimal
import uuid

import django.core.validators
import django.db.models.deletion
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        ("fleet", "0001_initial"),
    ]

    operations = [
        migrations.CreateModel(
            name="Booking",
            fields=[
                ("id", models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                (
                    "trip_type",
                    models.CharField(
                        choices=[("oneWay", "One way"), ("roundTrip", "Round trip")],
                        default="oneWay",
                        max_length=16,
                    ),
                ),
                ("pickup_location", models.CharField(max_length=255)),
                ("dropoff_location", models.CharField(blank=True, max_length=255)),
                ("pickup_date", models.DateTimeField()),
                ("return_pickup_location", models.CharField(blank=True, max_length=255, null=True)),
                ("return_dropoff_location", models.CharField(blank=True, max_length=255, null=True)),
                ("return_date", models.DateTimeField(blank=True, null=True)),
                (
                    "passengers",
                    models.PositiveSmallIntegerField(
                        default=1, validators=[django.core.validators.MinValueValidator(1)]
                    ),
                ),
                ("full_name", models.CharField(max_length=255)),
                ("email", models.EmailField(max_length=254)),
                ("phone", models.CharField(max_length=50)),
                ("notes", models.TextField(blank=True)),
                (
                    "status",
                    models.CharField(
                        choices=[
                            ("pending", "Pending"),
                            ("confirmed", "Confirmed"),
                            ("completed", "Completed"),
                            ("cancelled", "Cancelled"),
                        ],
                        default="pending",
                        max_length=20,
                    ),
                ),
                (
                    "total_price",
                    models.DecimalField(
                        decimal_places=2,
                        default=decimal.Decimal("0.00"),
                        max_digits=12,
                        validators=[django.core.validators.MinValueValidator(decimal.Decimal("0.00"))],
                    ),
                ),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                (
                    "car",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.PROTECT,
                        related_name="bookings",
                        to="fleet.car",
                    ),
                ),
            ],
            options={
                "verbose_name": "Booking",
                "verbose_name_plural": "Bookings",
                "ordering": ["-created_at"],
                "indexes": [
                    models.Index(fields=["created_at"], name="booking_created_at_idx"),
                    models.Index(fields=["status"], name="booking_status_idx"),
                ],
                "constraints": [
                    models.CheckConstraint(
                        condition=models.Q(("status__in", ["pending", "confirmed", "completed", "cancelled"])),
                        name="booking_valid_status",
                    ),
                    models.CheckConstraint(
                        condition=models.Q(
                            models.Q(
                                ("trip_type", "roundTrip"),
                                ("return_pickup_location__isnull", False),
                                ("return_dropoff_location__isnull", False),
                                ("return_date__isnull", False),
                            ),
                            models.Q(
                                ("trip_type", "oneWay"),
                                ("return_pickup_location__isnull", True),
                                ("return_dropoff_location__isnull", True),
                                ("return_date__isnull", True),
                            ),
                            _connector="OR",
                        ),
                        name="booking_return_fields_match_trip_type",
                    ),
                    models.CheckConstraint(
                        condition=models.Q(("total_price__gte", 0)),
                        name="booking_total_not_negative",
                    ),
                    models.CheckConstraint(
                        condition=models.Q(("passengers__gte", 1)),
                        name="booking_passengers_positive",
                    ),
                ],
            },
        ),
    ]
