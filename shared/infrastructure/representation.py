"""
Representation adapters

The API speaks two shapes of the same cars and bookings:

- relational: canonical field names, bookings embed a summary of their car
- legacy: flat records with the older aliases
  (customer = full_name, passengers = seats on cars, price = price_per_day)

One adapter is chosen per request (``get_representation``) and hands the
view the serializer classes for its shape. Inbound payloads may use either
shape; aliases resolve to the canonical field before validation.
"""

from typing import Any, Dict, Mapping

from django.conf import settings
from rest_framework import serializers  # type: ignore

from apps.bookings.domain.entities import Booking
from apps.bookings.serializers import (
    EDITABLE_FIELDS,
    BookingSerializer,
    LegacyBookingSerializer,
    validate_booking,
    validate_status,
)
from apps.fleet.domain.entities import Car
from apps.fleet.serializers import WRITABLE_FIELDS, CarSerializer, LegacyCarSerializer, validate_car
from shared.api.serializers import TimestampField, validate_with
from shared.domain.exceptions import FieldError, ValidationError

CAR_ALIASES = {
    'passengers': 'seats',
    'price': 'price_per_day',
}
IDENTITY_FIELDS = ('id', 'created_at', 'updated_at')
BOOKING_ALIASES = {
    'customer': 'full_name',
}


class IdentitySerializer(serializers.Serializer):
    id = serializers.UUIDField(required=False, allow_null=True)
    created_at = TimestampField(required=False, allow_null=True)
    updated_at = TimestampField(required=False, allow_null=True)


def _resolve_aliases(external: Mapping[str, Any], aliases: Dict[str, str]) -> Dict[str, Any]:
    data = dict(external.items())
    for alias, canonical in aliases.items():
        if alias in data:
            value = data.pop(alias)
            # the canonical name wins when both are sent
            data.setdefault(canonical, value)
    return data


def _restore_identity(entity, data: Mapping[str, Any]):
    identity = validate_with(IdentitySerializer, {
        name: data[name] for name in IDENTITY_FIELDS if name in data
    })
    for name, value in identity.items():
        if value is not None:
            setattr(entity, name, value)
    return entity


class RepresentationAdapter:
    """Converts between the canonical entities and one external shape."""

    name = None
    car_serializer_class = None
    booking_serializer_class = None

    def serializer_class(self, resource: str):
        """The output serializer for ``resource`` ('car' or 'booking') in this shape."""
        return {
            'car': self.car_serializer_class,
            'booking': self.booking_serializer_class,
        }[resource]

    def car_payload(self, external: Mapping[str, Any]) -> Dict[str, Any]:
        """Resolve aliases of an inbound car payload."""
        return _resolve_aliases(external, CAR_ALIASES)

    def booking_payload(self, external: Mapping[str, Any]) -> Dict[str, Any]:
        """Resolve aliases of an inbound booking payload."""
        return _resolve_aliases(external, BOOKING_ALIASES)

    def to_canonical_car(self, external: Mapping[str, Any]) -> Car:
        data = self.car_payload(external)
        fields = {
            name: value for name, value in data.items()
            if name in WRITABLE_FIELDS and value is not None
        }
        car = validate_car(fields, partial=True).apply(Car(name=''))
        return _restore_identity(car, data)

    def to_canonical_booking(self, external: Mapping[str, Any]) -> Booking:
        data = self.booking_payload(external)
        fields = {name: value for name, value in data.items() if name in EDITABLE_FIELDS}
        booking = validate_booking(fields)
        if data.get('status') is not None:
            booking.status = validate_status(data['status'])
        return _restore_identity(booking, data)

    def from_canonical_car(self, car: Car) -> Dict[str, Any]:
        return self.car_serializer_class(car).data

    def from_canonical_booking(self, booking: Booking, car: Car | None = None) -> Dict[str, Any]:
        cars = {car.id: car} if car is not None else {}
        return self.booking_serializer_class(booking, context={'cars': cars}).data


class RelationalRepresentation(RepresentationAdapter):
    name = 'relational'
    car_serializer_class = CarSerializer
    booking_serializer_class = BookingSerializer


class LegacyRepresentation(RepresentationAdapter):
    name = 'legacy'
    car_serializer_class = LegacyCarSerializer
    booking_serializer_class = LegacyBookingSerializer


REPRESENTATIONS = {
    RelationalRepresentation.name: RelationalRepresentation,
    LegacyRepresentation.name: LegacyRepresentation,
}


def get_representation(name: str | None = None) -> RepresentationAdapter:
    """Return the named adapter, or the configured default when no name is given."""
    if not name:
        name = getattr(settings, 'RENTAL_REPRESENTATION', RelationalRepresentation.name)
    adapter_class = REPRESENTATIONS.get(name)
    if adapter_class is None:
        raise ValidationError([
            FieldError(
                field='representation',
                code=FieldError.INVALID,
                message=f"representation must be one of: {', '.join(REPRESENTATIONS)}",
                value=name,
            )
        ])
    return adapter_class()
