"""
Rental Domain Events

Events that represent things that have happened to bookings and cars.
These are published after successful transaction commits.
"""

from dataclasses import dataclass, field
from decimal import Decimal
from typing import List
from uuid import UUID

from shared.domain.base import DomainEvent


# ===== Booking Events =====

@dataclass(kw_only=True)
class BookingCreated(DomainEvent):
    """
    Event: A new booking request was submitted

    Triggers:
    - Audit log entry for the back office
    """
    booking_id: UUID
    car_id: UUID
    total_price: Decimal


@dataclass(kw_only=True)
class BookingStatusChanged(DomainEvent):
    """Event: An administrator moved a booking to a new status"""
    booking_id: UUID
    old_status: str
    new_status: str


@dataclass(kw_only=True)
class BookingDeleted(DomainEvent):
    """Event: An administrator removed a booking"""
    booking_id: UUID
    car_id: UUID


# ===== Inventory Events =====

@dataclass(kw_only=True)
class CarDeleted(DomainEvent):
    """Event: A car without bookings was removed from the fleet"""
    car_id: UUID


@dataclass(kw_only=True)
class CarsBulkDeleted(DomainEvent):
    """
    Event: A bulk delete finished

    Cars referenced by bookings are reported as skipped.
    """
    deleted_ids: List[str] = field(default_factory=list)
    skipped_ids: List[str] = field(default_factory=list)
