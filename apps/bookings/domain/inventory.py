"""
Inventory Consistency Guard

Keeps bookings and cars referentially consistent:
a booking may only reference an existing car, and a car
referenced by any booking cannot be deleted.

Strategy (Defense in Depth):
1. Domain validation: the guard checks before every create/delete
2. Pessimistic locking: car rows are read with SELECT FOR UPDATE
   inside the command handler's transaction
3. Database constraint: bookings.car_id is a PROTECT foreign key,
   so a delete racing a new booking still fails
"""

from dataclasses import dataclass, field
from typing import Iterable, List
from uuid import UUID

from apps.fleet.domain.entities import Car
from apps.fleet.domain.repositories import AbstractCarRepository
from shared.domain.exceptions import ConflictError, NotFoundError

from .repositories import AbstractBookingRepository


@dataclass
class BulkDeletePlan:
    """
    Partition of a bulk delete request

    deletable: cars without bookings, safe to remove
    blocked: cars referenced by at least one booking
    missing: ids that match no car
    """
    deletable: List[Car] = field(default_factory=list)
    blocked: List[UUID] = field(default_factory=list)
    missing: List[UUID] = field(default_factory=list)

    @property
    def deletable_ids(self) -> List[UUID]:
        return [car.id for car in self.deletable]


class InventoryConsistencyGuard:
    """
    Usage:
        guard = InventoryConsistencyGuard(car_repo, booking_repo)

        # Before creating a booking
        car = guard.assert_car_exists(booking.car_id, lock=True)

        # Before deleting a car
        guard.assert_deletable(car_id)

        # Before a bulk delete: delete plan.deletable, report plan.blocked
        plan = guard.assert_bulk_deletable(car_ids)
    """

    def __init__(self, car_repo: AbstractCarRepository, booking_repo: AbstractBookingRepository):
        self.car_repo = car_repo
        self.booking_repo = booking_repo

    def assert_car_exists(self, car_id: UUID, lock: bool = False) -> Car:
        """
        Return the referenced car

        Raises:
            NotFoundError: naming the missing car id
        """
        car = self.car_repo.find_by_id(car_id, lock=lock)
        if car is None:
            raise NotFoundError('Car', car_id)
        return car

    def assert_deletable(self, car_id: UUID) -> None:
        """
        Raises:
            ConflictError: when at least one booking references the car
        """
        references = self.booking_repo.count_for_car(car_id)
        if references:
            raise ConflictError(
                f"Cannot delete, in use: car {car_id} is referenced by {references} booking(s)",
                blocking_ids=[car_id],
            )

    def assert_bulk_deletable(self, car_ids: Iterable[UUID], lock: bool = False) -> BulkDeletePlan:
        """
        Split the requested ids instead of failing the whole batch

        Duplicates are collapsed and the request order is preserved.
        """
        requested = list(dict.fromkeys(car_ids))
        found = {car.id: car for car in self.car_repo.find_by_ids(requested, lock=lock)}
        referenced = self.booking_repo.referenced_car_ids(found.keys())

        plan = BulkDeletePlan()
        for car_id in requested:
            if car_id not in found:
                plan.missing.append(car_id)
            elif car_id in referenced:
                plan.blocked.append(car_id)
            else:
                plan.deletable.append(found[car_id])
        return plan
