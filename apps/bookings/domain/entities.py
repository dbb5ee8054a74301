"""
Booking Domain Entities

Core business entities for the booking domain:
- Booking: Main aggregate representing a car reservation
- BookingStatus: FSM states for booking lifecycle
- TripType: single leg or outbound plus return leg
"""

from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal
from enum import Enum
from typing import List
from uuid import UUID

from shared.domain.base import Aggregate

RETURN_FIELDS = ('return_pickup_location', 'return_dropoff_location', 'return_date')


class BookingStatus(Enum):
    """
    Booking Status Finite State Machine

    State transitions:
    - PENDING -> CONFIRMED (administrator accepted the request)
    - PENDING -> COMPLETED (rental finished)
    - PENDING -> CANCELLED (request withdrawn or rejected)
    CONFIRMED, COMPLETED and CANCELLED are terminal.
    """
    PENDING = 'pending'
    CONFIRMED = 'confirmed'
    COMPLETED = 'completed'
    CANCELLED = 'cancelled'

    @classmethod
    def values(cls) -> List[str]:
        return [member.value for member in cls]


class TripType(Enum):
    ONE_WAY = 'oneWay'
    ROUND_TRIP = 'roundTrip'

    @classmethod
    def values(cls) -> List[str]:
        return [member.value for member in cls]


# Statuses that count towards revenue
REVENUE_STATUSES = (BookingStatus.CONFIRMED, BookingStatus.COMPLETED)

# Statuses that keep a car occupied
ACTIVE_STATUSES = (BookingStatus.PENDING, BookingStatus.CONFIRMED)


@dataclass(kw_only=True, eq=False)
class Booking(Aggregate):
    """
    Booking Aggregate Root

    Key invariants:
    - return_* fields are all set for a round trip and all None for a one-way trip
    - status is one of BookingStatus
    - passengers is positive, total_price is non-negative once priced
    """

    trip_type: TripType
    pickup_location: str
    pickup_date: datetime
    car_id: UUID
    full_name: str
    email: str
    phone: str

    dropoff_location: str = ''
    return_pickup_location: str | None = None
    return_dropoff_location: str | None = None
    return_date: datetime | None = None
    passengers: int = 1
    notes: str = ''
    status: BookingStatus = BookingStatus.PENDING
    total_price: Decimal | None = None

    def __post_init__(self):
        if self.passengers < 1:
            raise ValueError("Passengers count must be at least 1")
        if self.total_price is not None and self.total_price < 0:
            raise ValueError("Total price cannot be negative")

        populated = [getattr(self, name) is not None for name in RETURN_FIELDS]
        if self.trip_type == TripType.ROUND_TRIP and not all(populated):
            raise ValueError("Round trip bookings need every return field")
        if self.trip_type == TripType.ONE_WAY and any(populated):
            raise ValueError("One-way bookings cannot carry return fields")

    @property
    def is_round_trip(self) -> bool:
        return self.trip_type == TripType.ROUND_TRIP

    @property
    def is_active(self) -> bool:
        return self.status in ACTIVE_STATUSES

    @property
    def counts_as_revenue(self) -> bool:
        return self.status in REVENUE_STATUSES

    @property
    def rental_days(self) -> int:
        """Number of billable days, at least one."""
        if not self.return_date:
            return 1
        seconds = (self.return_date - self.pickup_date).total_seconds()
        days = -(-int(seconds) // 86400)
        return max(days, 1)

    def apply_daily_rate(self, price_per_day: Decimal) -> Decimal:
        """Price the booking from the car's daily rate unless a total was supplied."""
        if self.total_price is None:
            self.total_price = (price_per_day * self.rental_days).quantize(Decimal('0.01'))
        return self.total_price

    def __str__(self):
        return f"Booking {self.id} ({self.status.value})"

    def __repr__(self):
        return (
            f"Booking(id={self.id}, car_id={self.car_id}, "
            f"status={self.status.value}, pickup_date={self.pickup_date})"
        )
