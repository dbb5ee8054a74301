"""
Booking Command Handlers

These are the use cases for the booking domain.
They orchestrate domain operations within transactions.

Commands:
- CreateBookingCommand: Submit a booking from the public flow
- UpdateBookingStatusCommand: Move a booking through its lifecycle
- UpdateBookingCommand: Administrator field corrections
- DeleteBookingCommand: Administrator removal of a booking
"""

from dataclasses import dataclass
from typing import Any, Mapping
from uuid import UUID
import logging

from shared.application.uow import DjangoUnitOfWork
from shared.domain.exceptions import NotFoundError
from apps.bookings.domain.entities import Booking
from apps.bookings.domain.events import BookingCreated, BookingDeleted
from apps.bookings.domain.inventory import InventoryConsistencyGuard
from apps.bookings.domain.repositories import AbstractBookingRepository
from apps.bookings.domain.status_machine import BookingStatusMachine
from apps.bookings.serializers import validate_booking, validate_booking_changes, validate_status
from apps.fleet.domain.repositories import AbstractCarRepository

logger = logging.getLogger(__name__)


# ===== Commands =====

@dataclass
class CreateBookingCommand:
    """
    Command to create a new booking

    The payload is validated by the handler before anything is read
    from or written to the database.
    """
    payload: Mapping[str, Any]


@dataclass
class UpdateBookingStatusCommand:
    booking_id: UUID
    status: Any


@dataclass
class UpdateBookingCommand:
    booking_id: UUID
    payload: Mapping[str, Any]


@dataclass
class DeleteBookingCommand:
    booking_id: UUID


# ===== Command Handlers =====

class CreateBookingHandler:
    """
    Handler for CreateBooking command

    Strategy:
    1. Validate the payload (no database access on failure)
    2. Start database transaction (atomic)
    3. Load the referenced car with SELECT FOR UPDATE, fail if absent
    4. Price the booking from the car's daily rate when no total was sent
    5. Insert the booking; the PROTECT foreign key guards the reference
    6. Publish BookingCreated after commit
    """

    def __init__(self, car_repo: AbstractCarRepository, booking_repo: AbstractBookingRepository):
        self.booking_repo = booking_repo
        self.guard = InventoryConsistencyGuard(car_repo, booking_repo)

    def handle(self, command: CreateBookingCommand) -> Booking:
        booking = validate_booking(command.payload)

        logger.info(
            f"Creating {booking.trip_type.value} booking for car {booking.car_id}, "
            f"pickup {booking.pickup_date.isoformat()}"
        )

        with DjangoUnitOfWork() as uow:
            try:
                car = self.guard.assert_car_exists(booking.car_id, lock=True)
            except NotFoundError:
                logger.warning(f"Booking rejected: car {booking.car_id} does not exist")
                raise

            booking.apply_daily_rate(car.price_per_day)
            booking.add_event(BookingCreated(
                aggregate_id=booking.id,
                booking_id=booking.id,
                car_id=car.id,
                total_price=booking.total_price,
            ))

            created = self.booking_repo.insert(booking)
            uow.collect_events(booking)

        logger.info(f"Booking created successfully: {created.id} (total {created.total_price})")
        return created


class UpdateBookingStatusHandler:
    """
    Handler for status changes

    Setting the current status again is accepted and writes nothing.
    """

    def __init__(self, booking_repo: AbstractBookingRepository,
                 status_machine: BookingStatusMachine | None = None):
        self.booking_repo = booking_repo
        self.status_machine = status_machine or BookingStatusMachine()

    def handle(self, command: UpdateBookingStatusCommand) -> Booking:
        target = validate_status(command.status)

        with DjangoUnitOfWork() as uow:
            booking = self.booking_repo.find_by_id(command.booking_id, lock=True)
            if booking is None:
                raise NotFoundError('Booking', command.booking_id)

            changed = self.status_machine.transition(booking, target)
            if not changed:
                logger.info(f"Booking {booking.id} already {target.value}, nothing to do")
                return booking

            uow.collect_events(booking)
            booking = self.booking_repo.save(booking)

        logger.info(f"Booking {booking.id} moved to {target.value}")
        return booking


class UpdateBookingHandler:
    """Handler for administrator corrections of booking fields"""

    def __init__(self, car_repo: AbstractCarRepository, booking_repo: AbstractBookingRepository):
        self.booking_repo = booking_repo
        self.guard = InventoryConsistencyGuard(car_repo, booking_repo)

    def handle(self, command: UpdateBookingCommand) -> Booking:
        with DjangoUnitOfWork():
            current = self.booking_repo.find_by_id(command.booking_id, lock=True)
            if current is None:
                raise NotFoundError('Booking', command.booking_id)

            updated = validate_booking_changes(current, command.payload)
            if updated.car_id != current.car_id:
                self.guard.assert_car_exists(updated.car_id, lock=True)

            saved = self.booking_repo.save(updated)

        logger.info(f"Booking {saved.id} corrected: {sorted(command.payload)}")
        return saved


class DeleteBookingHandler:
    """Handler for removing a booking; the car it referenced becomes deletable again"""

    def __init__(self, booking_repo: AbstractBookingRepository):
        self.booking_repo = booking_repo

    def handle(self, command: DeleteBookingCommand) -> Booking:
        with DjangoUnitOfWork() as uow:
            booking = self.booking_repo.find_by_id(command.booking_id, lock=True)
            if booking is None:
                raise NotFoundError('Booking', command.booking_id)

            self.booking_repo.delete_by_id(booking.id)
            uow.add_event(BookingDeleted(
                aggregate_id=booking.id,
                booking_id=booking.id,
                car_id=booking.car_id,
            ))

        logger.info(f"Booking {booking.id} deleted")
        return booking
