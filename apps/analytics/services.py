"""
Dashboard statistics

StatsAggregator reads the bookings created inside a reporting window
and the whole car inventory, then derives counts, revenue, rankings
and rates for the admin dashboard.
"""

from __future__ import annotations

from collections import Counter
from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal
from typing import Any, Dict, List
import logging

from django.conf import settings  # type: ignore
from django.utils import timezone  # type: ignore

from apps.bookings.domain.entities import Booking, BookingStatus
from apps.bookings.domain.repositories import AbstractBookingRepository
from apps.fleet.domain.entities import Car
from apps.fleet.domain.repositories import AbstractCarRepository
from shared.domain.value_objects import DateTimeRange

logger = logging.getLogger(__name__)

RECENT_BOOKINGS_LIMIT = 5


def percentage(part: int, whole: int) -> float:
    """Share of ``whole`` in percent, rounded to 2 decimals; 0 when whole is 0."""
    if not whole:
        return 0.0
    return round(part / whole * 100, 2)


@dataclass
class TopCar:
    car_id: Any
    name: str | None
    make: str | None
    model: str | None
    bookings: int


@dataclass
class Stats:
    period: DateTimeRange
    total_bookings: int = 0
    bookings_by_status: Dict[str, int] = field(default_factory=dict)
    revenue: Decimal = Decimal('0')
    top_cars: List[TopCar] = field(default_factory=list)
    cars_by_status: Dict[str, int] = field(default_factory=dict)
    total_cars: int = 0
    active_bookings: int = 0
    completion_rate: float = 0.0
    cancellation_rate: float = 0.0
    occupancy_rate: float = 0.0
    recent_bookings: List[Dict[str, Any]] = field(default_factory=list)


class StatsAggregator:
    """
    Usage:
        aggregator = StatsAggregator(car_repo, booking_repo)
        stats = aggregator.compute_stats(start, end)

    The two reads (bookings in range, all cars) are independent and run
    one after the other on the request's connection.
    """

    def __init__(self, car_repo: AbstractCarRepository, booking_repo: AbstractBookingRepository,
                 top_cars_limit: int | None = None, default_days: int | None = None):
        self.car_repo = car_repo
        self.booking_repo = booking_repo
        self.top_cars_limit = top_cars_limit or getattr(settings, 'RENTAL_TOP_CARS_LIMIT', 5)
        self.default_days = default_days or getattr(settings, 'RENTAL_STATS_DEFAULT_DAYS', 30)

    def compute_stats(self, start: datetime | None = None, end: datetime | None = None, *,
                      now: datetime | None = None) -> Stats:
        period = DateTimeRange.resolve(start, end, now=now or timezone.now(), default_days=self.default_days)
        logger.info(f"Computing stats for {period}")

        bookings = self.booking_repo.query_by_date_range(period.start, period.end)
        cars = self.car_repo.list_all()
        cars_by_id = {car.id: car for car in cars}

        stats = Stats(period=period)
        stats.total_bookings = len(bookings)

        status_counts = Counter(booking.status for booking in bookings)
        stats.bookings_by_status = {
            status.value: status_counts[status]
            for status in BookingStatus
            if status_counts[status]
        }
        stats.revenue = sum(
            (booking.total_price or Decimal('0') for booking in bookings if booking.counts_as_revenue),
            Decimal('0'),
        )
        stats.top_cars = self._top_cars(bookings, cars_by_id)

        car_status_counts = Counter(car.status.value for car in cars)
        stats.cars_by_status = dict(car_status_counts)
        stats.total_cars = len(cars)

        stats.active_bookings = sum(1 for booking in bookings if booking.is_active)
        stats.completion_rate = percentage(status_counts[BookingStatus.COMPLETED], stats.total_bookings)
        stats.cancellation_rate = percentage(status_counts[BookingStatus.CANCELLED], stats.total_bookings)
        stats.occupancy_rate = percentage(stats.active_bookings, stats.total_cars)

        stats.recent_bookings = self._recent_bookings(bookings, cars_by_id)

        logger.info(
            f"Stats computed: {stats.total_bookings} bookings, revenue {stats.revenue}, "
            f"{stats.total_cars} cars"
        )
        return stats

    def _top_cars(self, bookings: List[Booking], cars_by_id: Dict[Any, Car]) -> List[TopCar]:
        counts = Counter(booking.car_id for booking in bookings)
        ranked = sorted(counts.items(), key=lambda item: (-item[1], str(item[0])))

        top = []
        for car_id, count in ranked[:self.top_cars_limit]:
            car = cars_by_id.get(car_id)
            top.append(TopCar(
                car_id=car_id,
                name=car.display_name if car else None,
                make=car.make if car else None,
                model=car.model if car else None,
                bookings=count,
            ))
        return top

    def _recent_bookings(self, bookings: List[Booking], cars_by_id: Dict[Any, Car]) -> List[Dict[str, Any]]:
        latest = sorted(bookings, key=lambda booking: booking.created_at, reverse=True)
        recent = []
        for booking in latest[:RECENT_BOOKINGS_LIMIT]:
            car = cars_by_id.get(booking.car_id)
            recent.append({
                'id': booking.id,
                'full_name': booking.full_name,
                'car_name': car.display_name if car else None,
                'pickup_date': booking.pickup_date,
                'status': booking.status.value,
                'total_price': booking.total_price,
            })
        return recent
