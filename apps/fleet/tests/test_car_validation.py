"""Tests for car payload validation."""

from decimal import Decimal

import pytest

from apps.fleet.domain.entities import Car, CarChanges, CarStatus
from apps.fleet.serializers import validate_car
from shared.domain.exceptions import FieldError, ValidationError


def payload(**overrides):
    data = {
        "make": "Renault",
        "model": "Clio",
        "year": 2021,
        "price_per_day": "39.90",
    }
    data.update(overrides)
    return data


def test_minimal_car_gets_defaults():
    car = validate_car(payload())

    assert isinstance(car, Car)
    assert car.name == "Renault Clio"
    assert car.seats == 4
    assert car.luggage == 0
    assert car.status == CarStatus.ACTIVE
    assert car.price_per_day == Decimal("39.90")
    assert car.features == []
    assert car.images == []


@pytest.mark.parametrize("missing", ["make", "model", "year", "price_per_day"])
def test_required_fields_on_create(missing):
    data = payload()
    del data[missing]

    with pytest.raises(ValidationError) as excinfo:
        validate_car(data)

    assert excinfo.value.missing_fields == [missing]


def test_all_missing_fields_are_reported_together():
    with pytest.raises(ValidationError) as excinfo:
        validate_car({"name": "Nameless"})

    assert sorted(excinfo.value.missing_fields) == ["make", "model", "price_per_day", "year"]


@pytest.mark.parametrize(
    "field, value",
    [
        ("seats", 0),
        ("seats", "four"),
        ("luggage", -1),
        ("price_per_day", "-10"),
        ("year", "20x1"),
        ("status", "sold"),
    ],
)
def test_invalid_values_are_rejected(field, value):
    with pytest.raises(ValidationError) as excinfo:
        validate_car(payload(**{field: value}))

    assert excinfo.value.fields == [field]
    assert excinfo.value.errors[0].code == FieldError.INVALID


def test_unknown_fields_are_rejected():
    with pytest.raises(ValidationError) as excinfo:
        validate_car(payload(id="00000000-0000-0000-0000-000000000000", created_at="2024-01-01"))

    assert sorted(excinfo.value.fields) == ["created_at", "id"]
    assert {error.code for error in excinfo.value.errors} == {FieldError.NOT_ALLOWED}


def test_image_lists_are_cleaned():
    car = validate_car(payload(
        images='["https://cdn.example.com/a.jpg", null, "null", ""]',
        features=["gps", "", None],
    ))

    assert car.images == ["https://cdn.example.com/a.jpg"]
    assert car.features == ["gps"]


def test_legacy_single_image_is_folded_into_images():
    car = validate_car(payload(image="https://cdn.example.com/only.jpg"))
    assert car.images == ["https://cdn.example.com/only.jpg"]

    car = validate_car(payload(image="https://cdn.example.com/only.jpg", images=["https://cdn.example.com/a.jpg"]))
    assert car.images == ["https://cdn.example.com/a.jpg"]


def test_partial_update_validates_only_supplied_fields():
    changes = validate_car({"price_per_day": "55", "status": "maintenance"}, partial=True)

    assert isinstance(changes, CarChanges)
    assert changes.changes == {"price_per_day": Decimal("55"), "status": CarStatus.MAINTENANCE}


def test_partial_update_cannot_blank_required_fields():
    with pytest.raises(ValidationError) as excinfo:
        validate_car({"make": ""}, partial=True)

    assert excinfo.value.missing_fields == ["make"]


def test_changes_apply_to_a_car():
    car = validate_car(payload())
    changes = validate_car({"seats": 7, "features": "gps,bluetooth"}, partial=True)

    changes.apply(car)

    assert car.seats == 7
    assert car.features == ["gps", "bluetooth"]
