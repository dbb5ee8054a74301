import decimal
import uuid

import django.core.validators
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name="Car",
            fields=[
                ("id", models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ("name", models.CharField(max_length=255)),
                ("category", models.CharField(blank=True, max_length=100)),
                ("make", models.CharField(blank=True, max_length=100, null=True)),
                ("model", models.CharField(blank=True, max_length=100, null=True)),
                ("year", models.PositiveSmallIntegerField(blank=True, null=True)),
                ("fuel_type", models.CharField(blank=True, max_length=50)),
                (
                    "seats",
                    models.PositiveSmallIntegerField(
                        default=4, validators=[django.core.validators.MinValueValidator(1)]
                    ),
                ),
                ("luggage", models.PositiveSmallIntegerField(default=0)),
                (
                    "price_per_day",
                    models.DecimalField(
                        decimal_places=2,
                        default=decimal.Decimal("0.00"),
                        max_digits=10,
                        validators=[django.core.validators.MinValueValidator(decimal.Decimal("0.00"))],
                    ),
                ),
                (
                    "status",
                    models.CharField(
                        choices=[("active", "Active"), ("maintenance", "Maintenance"), ("inactive", "Inactive")],
                        default="active",
                        max_length=20,
                    ),
                ),
                ("features", models.JSONField(blank=True, default=list)),
                ("images", models.JSONField(blank=True, default=list)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
            ],
            options={
                "verbose_name": "Car",
                "verbose_name_plural": "Cars",
                "ordering": ["-created_at"],
                "indexes": [models.Index(fields=["status"], name="car_status_idx")],
                "constraints": [
                    models.CheckConstraint(
                        condition=models.Q(("status__in", ["active", "maintenance", "inactive"])),
                        name="car_valid_status",
                    ),
                    models.CheckConstraint(
                        condition=models.Q(("price_per_day__gte", 0)),
                        name="car_price_not_negative",
                    ),
                    models.CheckConstraint(
                        condition=models.Q(("seats__gte", 1)),
                        name="car_seats_positive",
                    ),
                ],
            },
        ),
    ]
