"""
Fleet Command Handlers

These are the administrative use cases for the car inventory.
They orchestrate domain operations within transactions.

Commands:
- CreateCarCommand: Add a car to the fleet
- UpdateCarCommand: Change fields of one car
- DeleteCarCommand: Remove a car nobody has booked
- BulkDeleteCarsCommand: Remove many cars, skipping booked ones
- BulkUpdateCarsCommand: Apply one patch to many cars
"""

from dataclasses import dataclass, field
from typing import Any, List, Mapping
from uuid import UUID
import logging

from django.db import transaction

from apps.bookings.domain.events import CarDeleted, CarsBulkDeleted
from apps.bookings.domain.inventory import InventoryConsistencyGuard
from apps.bookings.domain.repositories import AbstractBookingRepository
from apps.fleet.domain.entities import Car, CarChanges
from apps.fleet.domain.repositories import AbstractCarRepository
from apps.fleet.serializers import validate_car
from shared.application.uow import DjangoUnitOfWork
from shared.domain.exceptions import ConflictError, FieldError, NotFoundError, ValidationError

logger = logging.getLogger(__name__)


# ===== Commands =====

@dataclass
class CreateCarCommand:
    payload: Mapping[str, Any]


@dataclass
class UpdateCarCommand:
    car_id: UUID
    payload: Mapping[str, Any]


@dataclass
class DeleteCarCommand:
    car_id: UUID


@dataclass
class BulkDeleteCarsCommand:
    car_ids: List[UUID]


@dataclass
class BulkUpdateCarsCommand:
    car_ids: List[UUID]
    payload: Mapping[str, Any]


# ===== Results =====

@dataclass
class BulkDeleteResult:
    """Partial-batch outcome: what was deleted and what was skipped."""
    deleted: List[Car] = field(default_factory=list)
    skipped: List[UUID] = field(default_factory=list)
    missing: List[UUID] = field(default_factory=list)

    @property
    def deleted_count(self) -> int:
        return len(self.deleted)

    @property
    def skipped_count(self) -> int:
        return len(self.skipped)


@dataclass
class BulkUpdateResult:
    updated: List[Car] = field(default_factory=list)
    missing: List[UUID] = field(default_factory=list)


# ===== Command Handlers =====

class CreateCarHandler:

    def __init__(self, car_repo: AbstractCarRepository):
        self.car_repo = car_repo

    def handle(self, command: CreateCarCommand) -> Car:
        car = validate_car(command.payload)

        with DjangoUnitOfWork():
            created = self.car_repo.insert(car)

        logger.info(f"Car created: {created.display_name} (ID: {created.id})")
        return created


class UpdateCarHandler:

    def __init__(self, car_repo: AbstractCarRepository):
        self.car_repo = car_repo

    def handle(self, command: UpdateCarCommand) -> Car:
        changes: CarChanges = validate_car(command.payload, partial=True)

        with DjangoUnitOfWork():
            updated = self.car_repo.update_by_id(command.car_id, changes)
            if updated is None:
                raise NotFoundError('Car', command.car_id)

        logger.info(f"Car {command.car_id} updated: {sorted(changes.changes)}")
        return updated


class DeleteCarHandler:
    """
    Handler for deleting one car

    The reference check and the delete share a transaction and the
    car row is locked; the PROTECT foreign key backs the check up.
    """

    def __init__(self, car_repo: AbstractCarRepository, booking_repo: AbstractBookingRepository):
        self.car_repo = car_repo
        self.guard = InventoryConsistencyGuard(car_repo, booking_repo)

    def handle(self, command: DeleteCarCommand) -> Car:
        logger.info(f"Deleting car {command.car_id}")

        with DjangoUnitOfWork() as uow:
            car = self.guard.assert_car_exists(command.car_id, lock=True)
            try:
                self.guard.assert_deletable(car.id)
            except ConflictError:
                logger.warning(f"Car {car.id} is referenced by bookings, delete rejected")
                raise

            self.car_repo.delete_by_id(car.id)
            uow.add_event(CarDeleted(aggregate_id=car.id, car_id=car.id))

        logger.info(f"Car {car.id} deleted")
        return car


class BulkDeleteCarsHandler:
    """
    Handler for deleting many cars at once

    Cars referenced by bookings are skipped, never failing the batch.
    A booking created between the check and the delete is caught by the
    PROTECT foreign key inside a savepoint, and that car moves to skipped.
    """

    def __init__(self, car_repo: AbstractCarRepository, booking_repo: AbstractBookingRepository):
        self.car_repo = car_repo
        self.guard = InventoryConsistencyGuard(car_repo, booking_repo)

    def handle(self, command: BulkDeleteCarsCommand) -> BulkDeleteResult:
        logger.info(f"Bulk deleting {len(command.car_ids)} cars")

        with DjangoUnitOfWork() as uow:
            plan = self.guard.assert_bulk_deletable(command.car_ids, lock=True)
            deletable = list(plan.deletable)
            skipped = list(plan.blocked)

            while deletable:
                try:
                    with transaction.atomic():
                        self.car_repo.delete_by_ids([car.id for car in deletable])
                    break
                except ConflictError as exc:
                    blocking = set(exc.blocking_ids)
                    newly_blocked = [car.id for car in deletable if str(car.id) in blocking]
                    if not newly_blocked:
                        raise
                    logger.warning(f"Cars {newly_blocked} gained bookings during bulk delete, skipping")
                    skipped.extend(newly_blocked)
                    deletable = [car for car in deletable if str(car.id) not in blocking]

            result = BulkDeleteResult(deleted=deletable, skipped=skipped, missing=plan.missing)
            uow.add_event(CarsBulkDeleted(
                deleted_ids=[str(car.id) for car in result.deleted],
                skipped_ids=[str(car_id) for car_id in result.skipped],
            ))

        logger.info(
            f"Bulk delete finished: {result.deleted_count} deleted, "
            f"{result.skipped_count} skipped, {len(result.missing)} missing"
        )
        return result


class BulkUpdateCarsHandler:

    def __init__(self, car_repo: AbstractCarRepository):
        self.car_repo = car_repo

    def handle(self, command: BulkUpdateCarsCommand) -> BulkUpdateResult:
        changes: CarChanges = validate_car(command.payload, partial=True)
        if not changes:
            raise ValidationError([
                FieldError(field='changes', code=FieldError.REQUIRED, message='changes must not be empty')
            ])

        result = BulkUpdateResult()
        with DjangoUnitOfWork():
            for car_id in command.car_ids:
                updated = self.car_repo.update_by_id(car_id, changes)
                if updated is None:
                    result.missing.append(car_id)
                else:
                    result.updated.append(updated)

        logger.info(
            f"Bulk update of {sorted(changes.changes)} applied to {len(result.updated)} cars, "
            f"{len(result.missing)} missing"
        )
        return result
