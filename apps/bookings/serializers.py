"""Serializers for bookings."""

from __future__ import annotations

from collections.abc import Mapping
from decimal import Decimal
from typing import Any, Dict

from rest_framework import serializers  # type: ignore

from apps.fleet.serializers import CarSummarySerializer
from shared.api.serializers import StrictSerializer, TimestampField, error, validate_with
from shared.domain.validation import is_blank

from .domain.entities import RETURN_FIELDS, Booking, BookingStatus, TripType

REQUIRED_FIELDS = (
    'trip_type',
    'pickup_location',
    'pickup_date',
    'car_id',
    'full_name',
    'email',
    'phone',
)
EDITABLE_FIELDS = REQUIRED_FIELDS + (
    'dropoff_location',
    'return_pickup_location',
    'return_dropoff_location',
    'return_date',
    'passengers',
    'notes',
    'total_price',
)


class BookingWriteSerializer(StrictSerializer):
    """
    A booking request from the public booking flow

    Round trips need every return field; one-way trips may only send
    them empty. total_price is optional and priced from the car when
    left out.
    """

    trip_type = serializers.ChoiceField(choices=TripType.values())
    pickup_location = serializers.CharField(max_length=255)
    dropoff_location = serializers.CharField(max_length=255, required=False, allow_blank=True, allow_null=True)
    pickup_date = TimestampField()
    return_pickup_location = serializers.CharField(max_length=255, required=False, allow_blank=True,
                                                   allow_null=True)
    return_dropoff_location = serializers.CharField(max_length=255, required=False, allow_blank=True,
                                                    allow_null=True)
    return_date = TimestampField(required=False, allow_null=True)
    passengers = serializers.IntegerField(min_value=1, required=False, allow_null=True)
    car_id = serializers.UUIDField()
    full_name = serializers.CharField(max_length=255)
    email = serializers.EmailField(max_length=255)
    phone = serializers.CharField(max_length=50)
    notes = serializers.CharField(required=False, allow_blank=True, allow_null=True)
    total_price = serializers.DecimalField(max_digits=12, decimal_places=2, min_value=Decimal('0'),
                                           required=False, allow_null=True)

    def validate(self, attrs):  # type: ignore
        trip = TripType(attrs['trip_type'])
        errors = {}

        if trip == TripType.ROUND_TRIP:
            for name in RETURN_FIELDS:
                if is_blank(attrs.get(name)):
                    errors[name] = error(f"{name} is required", code='required')
        else:
            for name in RETURN_FIELDS:
                if not is_blank(attrs.get(name)):
                    errors[name] = error(f"{name} is only allowed for round trips", code='not_allowed')
                attrs[name] = None

        pickup_date, return_date = attrs['pickup_date'], attrs.get('return_date')
        if 'return_date' not in errors and return_date and return_date < pickup_date:
            errors['return_date'] = error("return_date must not be before pickup_date")

        if errors:
            raise serializers.ValidationError(errors)

        attrs['trip_type'] = trip
        attrs['dropoff_location'] = attrs.get('dropoff_location') or ''
        attrs['notes'] = attrs.get('notes') or ''
        if attrs.get('passengers') is None:
            attrs['passengers'] = 1
        return attrs


class BookingStatusSerializer(serializers.Serializer):
    status = serializers.ChoiceField(choices=BookingStatus.values())


def validate_booking(payload: Any) -> Booking:
    """
    Validate a booking request

    The returned booking is PENDING. total_price stays None when the
    caller did not supply one so it can be priced from the car.
    Raises ValidationError listing every failed field.
    """
    values = validate_with(BookingWriteSerializer, payload)
    return Booking(status=BookingStatus.PENDING, **values)


def validate_status(value: Any) -> BookingStatus:
    """Accept only the four booking statuses."""
    values = validate_with(BookingStatusSerializer, {'status': value})
    return BookingStatus(values['status'])


def booking_fields(booking: Booking) -> Dict[str, Any]:
    """The editable fields of a booking as a payload."""
    values = {name: getattr(booking, name) for name in EDITABLE_FIELDS}
    values['trip_type'] = booking.trip_type.value
    return values


def validate_booking_changes(current: Booking, payload: Any) -> Booking:
    """
    Validate an administrator's field corrections against a stored booking

    The corrections are merged into the current values and the result is
    validated as a whole, so trip type and return fields stay consistent.
    Identity, status and timestamps are kept from ``current``.
    """
    if not isinstance(payload, Mapping):
        return validate_booking(payload)

    merged = booking_fields(current)
    merged.update(payload)
    if merged.get('trip_type') == TripType.ONE_WAY.value:
        for name in RETURN_FIELDS:
            if name not in payload:
                merged[name] = None

    updated = validate_booking(merged)
    updated.id = current.id
    updated.status = current.status
    updated.created_at = current.created_at
    updated.updated_at = current.updated_at
    if updated.total_price is None:
        updated.total_price = current.total_price
    return updated


class BookingSerializer(serializers.Serializer):
    """
    A booking in the relational shape

    ``car`` is the booked car's summary, looked up in the ``cars`` context
    mapping of car id to Car; it is None when the car was not supplied.
    """

    id = serializers.UUIDField()
    trip_type = serializers.CharField(source='trip_type.value')
    pickup_location = serializers.CharField()
    dropoff_location = serializers.CharField()
    pickup_date = serializers.DateTimeField()
    return_pickup_location = serializers.CharField(allow_null=True)
    return_dropoff_location = serializers.CharField(allow_null=True)
    return_date = serializers.DateTimeField(allow_null=True)
    passengers = serializers.IntegerField()
    car_id = serializers.UUIDField()
    car = serializers.SerializerMethodField()
    full_name = serializers.CharField()
    email = serializers.EmailField()
    phone = serializers.CharField()
    notes = serializers.CharField()
    status = serializers.CharField(source='status.value')
    total_price = serializers.DecimalField(max_digits=12, decimal_places=2, allow_null=True)
    created_at = serializers.DateTimeField()
    updated_at = serializers.DateTimeField()

    def get_car(self, booking: Booking):
        car = self.context.get('cars', {}).get(booking.car_id)
        return CarSummarySerializer(car).data if car else None


class LegacyBookingSerializer(serializers.Serializer):
    """A booking in the flat shape older clients read, with ``customer`` and ``car_name``."""

    id = serializers.UUIDField()
    trip_type = serializers.CharField(source='trip_type.value')
    pickup_location = serializers.CharField()
    dropoff_location = serializers.CharField()
    pickup_date = serializers.DateTimeField()
    return_pickup_location = serializers.CharField(allow_null=True)
    return_dropoff_location = serializers.CharField(allow_null=True)
    return_date = serializers.DateTimeField(allow_null=True)
    passengers = serializers.IntegerField()
    car_id = serializers.UUIDField()
    car_name = serializers.SerializerMethodField()
    customer = serializers.CharField(source='full_name')
    email = serializers.EmailField()
    phone = serializers.CharField()
    notes = serializers.CharField()
    status = serializers.CharField(source='status.value')
    total_price = serializers.DecimalField(max_digits=12, decimal_places=2, allow_null=True)
    created_at = serializers.DateTimeField()
    updated_at = serializers.DateTimeField()

    def get_car_name(self, booking: Booking) -> str | None:
        car = self.context.get('cars', {}).get(booking.car_id)
        return car.display_name if car else None
