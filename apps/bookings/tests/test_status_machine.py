"""Tests for the booking status lifecycle."""

from datetime import datetime, timezone as dt_timezone
from uuid import uuid4

import pytest

from apps.bookings.domain.entities import Booking, BookingStatus, TripType
from apps.bookings.domain.events import BookingStatusChanged
from apps.bookings.domain.status_machine import BookingStatusMachine
from shared.domain.exceptions import FieldError, ValidationError


def make_booking(status=BookingStatus.PENDING):
    return Booking(
        trip_type=TripType.ONE_WAY,
        pickup_location="Izmir Airport",
        pickup_date=datetime(2024, 9, 1, 9, tzinfo=dt_timezone.utc),
        car_id=uuid4(),
        full_name="Can Yılmaz",
        email="can@example.com",
        phone="+90 555 666 7788",
        status=status,
    )


@pytest.mark.parametrize(
    "target", [BookingStatus.CONFIRMED, BookingStatus.COMPLETED, BookingStatus.CANCELLED]
)
def test_pending_moves_to_any_other_status(target):
    booking = make_booking()

    changed = BookingStatusMachine().transition(booking, target)

    assert changed is True
    assert booking.status == target
    [event] = booking.events
    assert isinstance(event, BookingStatusChanged)
    assert (event.old_status, event.new_status) == ("pending", target.value)


@pytest.mark.parametrize("status", list(BookingStatus))
def test_same_status_is_a_no_op(status):
    booking = make_booking(status)

    changed = BookingStatusMachine().transition(booking, status)

    assert changed is False
    assert booking.status == status
    assert booking.events == []


@pytest.mark.parametrize(
    "current", [BookingStatus.CONFIRMED, BookingStatus.COMPLETED, BookingStatus.CANCELLED]
)
@pytest.mark.parametrize("target", list(BookingStatus))
def test_terminal_statuses_do_not_move(current, target):
    if current == target:
        pytest.skip("same status is a no-op")
    booking = make_booking(current)

    with pytest.raises(ValidationError) as excinfo:
        BookingStatusMachine().transition(booking, target)

    assert excinfo.value.errors[0].code == FieldError.INVALID_TRANSITION
    assert excinfo.value.fields == ["status"]
    assert booking.status == current
    assert booking.events == []


def test_allowed_targets():
    machine = BookingStatusMachine()

    assert machine.allowed_targets(BookingStatus.PENDING) == {
        BookingStatus.CONFIRMED, BookingStatus.COMPLETED, BookingStatus.CANCELLED,
    }
    assert machine.allowed_targets(BookingStatus.CANCELLED) == frozenset()
    assert not machine.can_transition(BookingStatus.CONFIRMED, BookingStatus.PENDING)
