"""Integration tests for the dashboard statistics endpoint."""

from __future__ import annotations

from datetime import timedelta
from decimal import Decimal

from django.contrib.auth import get_user_model
from django.urls import reverse
from django.utils import timezone
from rest_framework import status
from rest_framework.test import APITestCase

from apps.bookings.models import Booking
from apps.fleet.models import Car


class StatsAPITests(APITestCase):

    def setUp(self) -> None:
        self.admin = get_user_model().objects.create_user(
            username="admin",
            email="admin@example.com",
            password="AdminPass123",
            is_staff=True,
        )
        self.car = Car.objects.create(name="Dacia Duster", make="Dacia", model="Duster",
                                      price_per_day=Decimal("45.00"))
        Car.objects.create(name="Spare", make="Kia", model="Picanto", status="maintenance")
        for booking_status, total in (("completed", "90.00"), ("confirmed", "45.00"), ("cancelled", "45.00")):
            Booking.objects.create(
                car=self.car,
                trip_type=Booking.TripType.ONE_WAY,
                pickup_location="Bodrum",
                pickup_date=timezone.now() + timedelta(days=3),
                full_name="Can Yıldız",
                email="can@example.com",
                phone="+90 555 333 4455",
                status=booking_status,
                total_price=Decimal(total),
            )
        self.url = reverse("analytics-stats")

    def test_requires_admin(self) -> None:
        response = self.client.get(self.url)

        self.assertIn(response.status_code, (status.HTTP_401_UNAUTHORIZED, status.HTTP_403_FORBIDDEN))

    def test_default_window_covers_recent_bookings(self) -> None:
        self.client.force_authenticate(self.admin)

        response = self.client.get(self.url)

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data["total_bookings"], 3)
        self.assertEqual(response.data["revenue"], "135.00")
        self.assertEqual(response.data["bookings_by_status"], {"confirmed": 1, "completed": 1, "cancelled": 1})
        self.assertEqual(response.data["completion_rate"], 33.33)
        self.assertEqual(response.data["total_cars"], 2)
        self.assertEqual(response.data["occupancy_rate"], 50.0)
        self.assertEqual(response.data["top_cars"][0]["bookings"], 3)
        self.assertEqual(len(response.data["recent_bookings"]), 3)

    def test_date_only_end_covers_the_whole_day(self) -> None:
        self.client.force_authenticate(self.admin)
        today = timezone.now().date().isoformat()

        response = self.client.get(self.url, {"start": today, "end": today})

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data["total_bookings"], 3)

    def test_range_in_the_past_is_empty(self) -> None:
        self.client.force_authenticate(self.admin)

        response = self.client.get(self.url, {"start": "2020-01-01", "end": "2020-01-31"})

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data["total_bookings"], 0)
        self.assertEqual(response.data["completion_rate"], 0.0)

    def test_unparseable_date_returns_400(self) -> None:
        self.client.force_authenticate(self.admin)

        response = self.client.get(self.url, {"start": "last tuesday"})

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertIn("start", response.data["errors"])

    def test_start_after_end_returns_400(self) -> None:
        self.client.force_authenticate(self.admin)

        response = self.client.get(self.url, {"start": "2024-02-01", "end": "2024-01-01"})

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertIn("start", response.data["errors"])
