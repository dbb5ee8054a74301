"""Integration tests for car API endpoints."""

from __future__ import annotations

from decimal import Decimal
from uuid import uuid4

from django.contrib.auth import get_user_model
from django.urls import reverse
from django.utils import timezone
from rest_framework import status
from rest_framework.test import APITestCase

from apps.bookings.models import Booking
from apps.fleet.models import Car


class CarAPITests(APITestCase):
    """Covers the public listing, admin writes and the bulk endpoints."""

    def setUp(self) -> None:
        self.admin = get_user_model().objects.create_user(
            username="admin",
            email="admin@example.com",
            password="AdminPass123",
            is_staff=True,
        )
        self.economy = Car.objects.create(
            name="Fiat Egea",
            make="Fiat",
            model="Egea",
            year=2021,
            category="economy",
            price_per_day=Decimal("30.00"),
            images=["https://cdn.example.com/egea.jpg"],
        )
        self.suv = Car.objects.create(
            name="Toyota RAV4",
            make="Toyota",
            model="RAV4",
            year=2023,
            category="suv",
            price_per_day=Decimal("90.00"),
        )
        self.list_url = reverse("car-list")

    def _detail_url(self, car_id) -> str:
        return reverse("car-detail", args=[car_id])

    def _book(self, car: Car) -> Booking:
        return Booking.objects.create(
            car=car,
            trip_type=Booking.TripType.ONE_WAY,
            pickup_location="Airport",
            pickup_date=timezone.now(),
            full_name="Elif Şahin",
            email="elif@example.com",
            phone="+90 555 222 3344",
        )

    def _car_payload(self) -> dict:
        return {
            "make": "Renault",
            "model": "Clio",
            "year": 2022,
            "price_per_day": "42.50",
            "features": ["bluetooth"],
        }

    def test_anyone_can_list_cars(self) -> None:
        response = self.client.get(self.list_url)

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data["count"], 2)
        names = {item["name"] for item in response.data["results"]}
        self.assertEqual(names, {"Fiat Egea", "Toyota RAV4"})

    def test_list_filters_by_category_and_status(self) -> None:
        Car.objects.create(name="Old Van", make="Ford", model="Transit", category="suv", status="inactive")

        response = self.client.get(self.list_url, {"category": "suv", "status": "active"})

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual([item["name"] for item in response.data["results"]], ["Toyota RAV4"])

    def test_featured_returns_most_expensive_active_cars(self) -> None:
        Car.objects.create(name="Luxury", make="BMW", model="X5", price_per_day=Decimal("200"), status="inactive")
        Car.objects.create(name="Mid", make="VW", model="Golf", price_per_day=Decimal("50"))
        Car.objects.create(name="Cheap", make="Dacia", model="Sandero", price_per_day=Decimal("20"))

        response = self.client.get(self.list_url, {"featured": "true"})

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(
            [item["name"] for item in response.data["results"]],
            ["Toyota RAV4", "Mid", "Fiat Egea"],
        )

    def test_list_supports_limit_and_offset(self) -> None:
        response = self.client.get(self.list_url, {"limit": 1, "offset": 1})

        self.assertEqual(response.data["count"], 2)
        self.assertEqual(len(response.data["results"]), 1)

    def test_legacy_representation_uses_old_field_names(self) -> None:
        response = self.client.get(self._detail_url(self.economy.id), {"representation": "legacy"})

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data["price"], "30.00")
        self.assertEqual(response.data["passengers"], 4)
        self.assertEqual(response.data["image"], "https://cdn.example.com/egea.jpg")

    def test_unknown_representation_is_rejected(self) -> None:
        response = self.client.get(self.list_url, {"representation": "xml"})

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertIn("representation", response.data["errors"])

    def test_unknown_car_returns_404(self) -> None:
        response = self.client.get(self._detail_url(uuid4()))

        self.assertEqual(response.status_code, status.HTTP_404_NOT_FOUND)
        self.assertTrue(response.data["detail"].startswith("Car "))

    def test_writes_require_admin(self) -> None:
        response = self.client.post(self.list_url, self._car_payload(), format="json")

        self.assertIn(response.status_code, (status.HTTP_401_UNAUTHORIZED, status.HTTP_403_FORBIDDEN))
        self.assertEqual(Car.objects.count(), 2)

    def test_admin_can_create_car(self) -> None:
        self.client.force_authenticate(self.admin)

        response = self.client.post(self.list_url, self._car_payload(), format="json")

        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        self.assertEqual(response.data["name"], "Renault Clio")
        self.assertEqual(response.data["seats"], 4)
        self.assertTrue(Car.objects.filter(name="Renault Clio").exists())

    def test_create_with_legacy_aliases(self) -> None:
        self.client.force_authenticate(self.admin)
        payload = {"make": "Opel", "model": "Corsa", "year": 2020, "price": "33", "passengers": 5}

        response = self.client.post(self.list_url, payload, format="json")

        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        car = Car.objects.get(name="Opel Corsa")
        self.assertEqual(car.seats, 5)
        self.assertEqual(car.price_per_day, Decimal("33.00"))

    def test_create_reports_missing_fields(self) -> None:
        self.client.force_authenticate(self.admin)

        response = self.client.post(self.list_url, {"make": "Opel"}, format="json")

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(response.data["detail"], "Validation failed")
        self.assertEqual(set(response.data["errors"]), {"model", "year", "price_per_day"})

    def test_admin_can_patch_car(self) -> None:
        self.client.force_authenticate(self.admin)

        response = self.client.patch(self._detail_url(self.suv.id), {"status": "maintenance"}, format="json")

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.suv.refresh_from_db()
        self.assertEqual(self.suv.status, "maintenance")

    def test_legacy_patch_with_empty_image_keeps_images(self) -> None:
        self.client.force_authenticate(self.admin)

        response = self.client.patch(
            self._detail_url(self.economy.id) + "?representation=legacy",
            {"price": "120", "image": ""},
            format="json",
        )

        self.assertEqual(response.status_code, status.HTTP_200_OK, response.data)
        self.assertEqual(response.data["price"], "120.00")
        self.assertEqual(response.data["images"], ["https://cdn.example.com/egea.jpg"])
        self.economy.refresh_from_db()
        self.assertEqual(self.economy.images, ["https://cdn.example.com/egea.jpg"])

    def test_patch_with_blank_name_falls_back_to_make_and_model(self) -> None:
        self.client.force_authenticate(self.admin)

        response = self.client.patch(self._detail_url(self.suv.id), {"name": ""}, format="json")

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data["name"], "Toyota RAV4")

    def test_delete_unreferenced_car(self) -> None:
        self.client.force_authenticate(self.admin)

        response = self.client.delete(self._detail_url(self.suv.id))

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertFalse(Car.objects.filter(pk=self.suv.id).exists())

    def test_delete_referenced_car_conflicts(self) -> None:
        self._book(self.suv)
        self.client.force_authenticate(self.admin)

        response = self.client.delete(self._detail_url(self.suv.id))

        self.assertEqual(response.status_code, status.HTTP_409_CONFLICT)
        self.assertEqual(response.data["detail"], "Cannot delete, in use")
        self.assertEqual(response.data["blocking_ids"], [str(self.suv.id)])
        self.assertTrue(Car.objects.filter(pk=self.suv.id).exists())

    def test_bulk_delete_returns_partial_outcome(self) -> None:
        spare = Car.objects.create(name="Spare", make="Kia", model="Rio")
        self._book(self.suv)
        self.client.force_authenticate(self.admin)

        response = self.client.post(
            reverse("car-bulk-delete"),
            {"ids": [str(self.economy.id), str(self.suv.id), str(spare.id)]},
            format="json",
        )

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data["deleted_count"], 2)
        self.assertEqual(response.data["skipped_count"], 1)
        self.assertEqual(response.data["skipped"], [str(self.suv.id)])
        self.assertEqual(list(Car.objects.values_list("id", flat=True)), [self.suv.id])

    def test_bulk_delete_rejects_empty_id_list(self) -> None:
        self.client.force_authenticate(self.admin)

        response = self.client.post(reverse("car-bulk-delete"), {"ids": []}, format="json")

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertIn("ids", response.data["errors"])

    def test_bulk_update(self) -> None:
        self.client.force_authenticate(self.admin)

        response = self.client.post(
            reverse("car-bulk-update"),
            {"ids": [str(self.economy.id), str(self.suv.id)], "changes": {"status": "maintenance"}},
            format="json",
        )

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(len(response.data["updated"]), 2)
        self.assertEqual(response.data["missing"], [])
        self.assertEqual(set(Car.objects.values_list("status", flat=True)), {"maintenance"})
