"""Serializers for the car inventory."""

from __future__ import annotations

from decimal import Decimal
from typing import Any, List
from uuid import UUID

from rest_framework import serializers  # type: ignore

from shared.api.serializers import StrictSerializer, StringListField, validate_with
from shared.domain.validation import normalize_string_list

from .domain.entities import Car, CarChanges, CarStatus

WRITABLE_FIELDS = (
    "name",
    "category",
    "make",
    "model",
    "year",
    "fuel_type",
    "seats",
    "luggage",
    "price_per_day",
    "status",
    "features",
    "images",
    "image",
)


class CarWriteSerializer(StrictSerializer):
    """
    Create or patch a car

    ``image`` is the single-image field of older clients. On create it
    fills ``images`` when no list was sent; on a patch it only does so
    when ``images`` is absent, and an empty value changes nothing.
    """

    name = serializers.CharField(max_length=255, required=False, allow_blank=True, allow_null=True)
    category = serializers.CharField(max_length=100, required=False, allow_blank=True, allow_null=True)
    make = serializers.CharField(max_length=100)
    model = serializers.CharField(max_length=100)
    year = serializers.IntegerField(min_value=1)
    fuel_type = serializers.CharField(max_length=50, required=False, allow_blank=True, allow_null=True)
    seats = serializers.IntegerField(min_value=1, required=False, allow_null=True)
    luggage = serializers.IntegerField(min_value=0, required=False, allow_null=True)
    price_per_day = serializers.DecimalField(max_digits=10, decimal_places=2, min_value=Decimal("0"))
    status = serializers.ChoiceField(choices=CarStatus.values(), required=False, allow_null=True)
    features = StringListField(required=False)
    images = StringListField(required=False)
    image = serializers.CharField(required=False, allow_blank=True, allow_null=True)

    def validate(self, attrs):  # type: ignore
        for name in ("name", "category", "fuel_type"):
            if name in attrs and attrs[name] is None:
                attrs[name] = ""
        for name in ("seats", "luggage", "status"):
            if name in attrs and attrs[name] is None:
                del attrs[name]
        if "status" in attrs:
            attrs["status"] = CarStatus(attrs["status"])

        legacy_image = normalize_string_list([attrs.pop("image", None)])
        if legacy_image:
            if self.partial:
                attrs.setdefault("images", legacy_image)
            elif not attrs.get("images"):
                attrs["images"] = legacy_image
        return attrs


def validate_car(payload: Any, *, partial: bool = False) -> Car | CarChanges:
    """
    Validate a car payload

    Returns a new Car for a create, or CarChanges when ``partial`` is set.
    Raises ValidationError listing every failed field.
    """
    values = validate_with(CarWriteSerializer, payload, partial=partial)
    if partial:
        return CarChanges(values)

    if not values.get("name"):
        values["name"] = " ".join(part for part in (values.get("make"), values.get("model")) if part)
    return Car(**values)


class CarSerializer(serializers.Serializer):
    """A car in the relational shape."""

    id = serializers.UUIDField()
    name = serializers.CharField()
    category = serializers.CharField()
    make = serializers.CharField()
    model = serializers.CharField()
    year = serializers.IntegerField()
    fuel_type = serializers.CharField()
    seats = serializers.IntegerField()
    luggage = serializers.IntegerField()
    price_per_day = serializers.DecimalField(max_digits=10, decimal_places=2)
    status = serializers.CharField(source="status.value")
    features = StringListField()
    images = StringListField()
    created_at = serializers.DateTimeField()
    updated_at = serializers.DateTimeField()


class LegacyCarSerializer(serializers.Serializer):
    """A car in the flat shape older clients read: passengers, price and a single image."""

    id = serializers.UUIDField()
    name = serializers.CharField()
    category = serializers.CharField()
    make = serializers.CharField()
    model = serializers.CharField()
    year = serializers.IntegerField()
    fuel_type = serializers.CharField()
    passengers = serializers.IntegerField(source="seats")
    luggage = serializers.IntegerField()
    price = serializers.DecimalField(source="price_per_day", max_digits=10, decimal_places=2)
    status = serializers.CharField(source="status.value")
    features = StringListField()
    images = StringListField()
    image = serializers.SerializerMethodField()
    created_at = serializers.DateTimeField()
    updated_at = serializers.DateTimeField()

    def get_image(self, car: Car) -> str | None:
        images = normalize_string_list(car.images)
        return images[0] if images else None


class CarSummarySerializer(serializers.Serializer):
    """The part of a car shown inside a booking."""

    id = serializers.UUIDField()
    name = serializers.CharField()
    make = serializers.CharField()
    model = serializers.CharField()
    price_per_day = serializers.DecimalField(max_digits=10, decimal_places=2)
    images = StringListField()


class CarIdsSerializer(serializers.Serializer):
    ids = serializers.ListField(child=serializers.UUIDField(), allow_empty=False)


def parse_car_ids(raw: Any) -> List[UUID]:
    """Parse the id list of a bulk request; it must be a non-empty list. Duplicates collapse."""
    values = validate_with(CarIdsSerializer, {"ids": raw})
    return list(dict.fromkeys(values["ids"]))
