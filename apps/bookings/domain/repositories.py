"""
Booking Repository Interface

The persistence collaborator the booking domain depends on.
"""

from abc import ABC, abstractmethod
from datetime import datetime
from typing import Iterable, List, Set
from uuid import UUID

from .entities import Booking


class AbstractBookingRepository(ABC):

    @abstractmethod
    def insert(self, booking: Booking) -> Booking:
        """Persist a new booking"""

    @abstractmethod
    def save(self, booking: Booking) -> Booking:
        """Write every field of an existing booking"""

    @abstractmethod
    def delete_by_id(self, booking_id: UUID) -> bool:
        """Remove one booking; False when it did not exist"""

    @abstractmethod
    def find_by_id(self, booking_id: UUID, lock: bool = False) -> Booking | None:
        """Load one booking, optionally locking its row until commit"""

    @abstractmethod
    def query_by_date_range(self, start: datetime | None, end: datetime | None) -> List[Booking]:
        """Bookings created within the inclusive range; None leaves a side open"""

    @abstractmethod
    def count_for_car(self, car_id: UUID) -> int:
        """How many bookings reference the car"""

    @abstractmethod
    def referenced_car_ids(self, car_ids: Iterable[UUID]) -> Set[UUID]:
        """The subset of car ids referenced by at least one booking"""
