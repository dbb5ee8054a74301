"""
Shared test fixtures

In-memory implementations of the car and booking repositories, so the
domain tests run without a database. Entities are copied in and out so
tests never share state with the store.
"""

from __future__ import annotations

from copy import deepcopy
from datetime import datetime
from typing import Dict, Iterable, List, Set
from uuid import UUID

import pytest

from apps.bookings.domain.entities import Booking
from apps.bookings.domain.repositories import AbstractBookingRepository
from apps.fleet.domain.entities import Car, CarChanges
from apps.fleet.domain.repositories import AbstractCarRepository
from shared.domain.base import utcnow
from shared.domain.exceptions import ConflictError


def _copy(entity):
    clone = deepcopy(entity)
    clone.clear_events()
    return clone


class InMemoryCarRepository(AbstractCarRepository):
    """
    Cars keyed by id, in insertion order

    Pass the booking repository to get the PROTECT behaviour of the
    database: deleting a referenced car raises ConflictError.
    """

    def __init__(self, cars: Iterable[Car] = (), bookings: 'InMemoryBookingRepository | None' = None):
        self._cars: Dict[UUID, Car] = {car.id: _copy(car) for car in cars}
        self.bookings = bookings

    def insert(self, car: Car) -> Car:
        if car.id in self._cars:
            raise ConflictError(f"Car {car.id} already exists", blocking_ids=[car.id])
        self._cars[car.id] = _copy(car)
        return _copy(car)

    def update_by_id(self, car_id: UUID, changes: CarChanges) -> Car | None:
        car = self._cars.get(car_id)
        if car is None:
            return None
        changes.apply(car)
        car.updated_at = utcnow()
        return _copy(car)

    def _protect(self, car_ids: List[UUID]):
        if self.bookings is None:
            return
        blocking = self.bookings.referenced_car_ids(car_ids)
        if blocking:
            raise ConflictError("Cannot delete, in use", blocking_ids=sorted(map(str, blocking)))

    def delete_by_id(self, car_id: UUID) -> bool:
        self._protect([car_id])
        return self._cars.pop(car_id, None) is not None

    def delete_by_ids(self, car_ids: Iterable[UUID]) -> int:
        ids = list(car_ids)
        self._protect(ids)
        return sum(1 for car_id in ids if self._cars.pop(car_id, None) is not None)

    def find_by_id(self, car_id: UUID, lock: bool = False) -> Car | None:
        car = self._cars.get(car_id)
        return _copy(car) if car else None

    def find_by_ids(self, car_ids: Iterable[UUID], lock: bool = False) -> List[Car]:
        return [_copy(self._cars[car_id]) for car_id in car_ids if car_id in self._cars]

    def list_all(self) -> List[Car]:
        return [_copy(car) for car in self._cars.values()]


class InMemoryBookingRepository(AbstractBookingRepository):

    def __init__(self, bookings: Iterable[Booking] = ()):
        self._bookings: Dict[UUID, Booking] = {booking.id: _copy(booking) for booking in bookings}

    def insert(self, booking: Booking) -> Booking:
        if booking.id in self._bookings:
            raise ConflictError(f"Booking {booking.id} already exists", blocking_ids=[booking.id])
        self._bookings[booking.id] = _copy(booking)
        return _copy(booking)

    def save(self, booking: Booking) -> Booking:
        booking.updated_at = utcnow()
        self._bookings[booking.id] = _copy(booking)
        return _copy(booking)

    def delete_by_id(self, booking_id: UUID) -> bool:
        return self._bookings.pop(booking_id, None) is not None

    def find_by_id(self, booking_id: UUID, lock: bool = False) -> Booking | None:
        booking = self._bookings.get(booking_id)
        return _copy(booking) if booking else None

    def query_by_date_range(self, start: datetime | None, end: datetime | None) -> List[Booking]:
        matches = [
            booking for booking in self._bookings.values()
            if (start is None or booking.created_at >= start) and (end is None or booking.created_at <= end)
        ]
        matches.sort(key=lambda booking: booking.created_at, reverse=True)
        return [_copy(booking) for booking in matches]

    def count_for_car(self, car_id: UUID) -> int:
        return sum(1 for booking in self._bookings.values() if booking.car_id == car_id)

    def referenced_car_ids(self, car_ids: Iterable[UUID]) -> Set[UUID]:
        wanted = set(car_ids)
        return {booking.car_id for booking in self._bookings.values() if booking.car_id in wanted}


@pytest.fixture
def memory_repositories():
    """Build a car and a booking repository; the car one honours booking references on delete."""

    def build(cars: Iterable[Car] = (), bookings: Iterable[Booking] = ()):
        booking_repo = InMemoryBookingRepository(bookings)
        return InMemoryCarRepository(cars, bookings=booking_repo), booking_repo

    return build
