"""Django ORM implementation of the car repository."""

from __future__ import annotations

from decimal import Decimal
from typing import Iterable, List
from uuid import UUID

from django.db.models.deletion import ProtectedError  # type: ignore

from shared.domain.exceptions import ConflictError
from shared.domain.validation import normalize_string_list
from shared.infrastructure.orm import lock_queryset_if_possible, translate_database_errors

from .domain.entities import Car, CarChanges, CarStatus
from .domain.repositories import AbstractCarRepository
from .models import Car as CarModel

PERSISTED_FIELDS = (
    "name",
    "category",
    "make",
    "model",
    "year",
    "fuel_type",
    "seats",
    "luggage",
    "price_per_day",
    "status",
    "features",
    "images",
)


def car_to_entity(row: CarModel) -> Car:
    """Map a stored row to the domain entity, repairing legacy list values."""
    return Car(
        id=row.id,
        name=row.name,
        category=row.category or "",
        make=row.make,
        model=row.model,
        year=row.year,
        fuel_type=row.fuel_type or "",
        seats=row.seats,
        luggage=row.luggage,
        price_per_day=Decimal(row.price_per_day),
        status=CarStatus(row.status),
        features=normalize_string_list(row.features),
        images=normalize_string_list(row.images),
        created_at=row.created_at,
        updated_at=row.updated_at,
    )


def _column_values(car: Car) -> dict:
    values = {name: getattr(car, name) for name in PERSISTED_FIELDS}
    values["status"] = car.status.value
    values["features"] = list(car.features)
    values["images"] = normalize_string_list(car.images)
    return values


class DjangoCarRepository(AbstractCarRepository):
    """Car persistence backed by ``apps.fleet.models.Car``."""

    def insert(self, car: Car) -> Car:
        with translate_database_errors("car insert"):
            row = CarModel.objects.create(id=car.id, **_column_values(car))
        return car_to_entity(row)

    def update_by_id(self, car_id: UUID, changes: CarChanges) -> Car | None:
        with translate_database_errors("car update"):
            row = lock_queryset_if_possible(CarModel.objects.filter(pk=car_id)).first()
            if row is None:
                return None
            car = changes.apply(car_to_entity(row))
            for name, value in _column_values(car).items():
                setattr(row, name, value)
            row.save()
        return car_to_entity(row)

    def delete_by_id(self, car_id: UUID) -> bool:
        try:
            with translate_database_errors("car delete"):
                deleted, _ = CarModel.objects.filter(pk=car_id).delete()
        except ConflictError as exc:
            if isinstance(exc.__cause__, ProtectedError):
                raise ConflictError("Cannot delete, in use", blocking_ids=[car_id]) from exc.__cause__
            raise
        return deleted > 0

    def delete_by_ids(self, car_ids: Iterable[UUID]) -> int:
        ids = list(car_ids)
        if not ids:
            return 0
        try:
            with translate_database_errors("car bulk delete"):
                deleted, _ = CarModel.objects.filter(pk__in=ids).delete()
        except ConflictError as exc:
            cause = exc.__cause__
            if isinstance(cause, ProtectedError):
                blocking = {booking.car_id for booking in cause.protected_objects}
                raise ConflictError("Cannot delete, in use", blocking_ids=sorted(map(str, blocking))) from cause
            raise
        return deleted

    def find_by_id(self, car_id: UUID, lock: bool = False) -> Car | None:
        queryset = CarModel.objects.filter(pk=car_id)
        if lock:
            queryset = lock_queryset_if_possible(queryset)
        with translate_database_errors("car lookup"):
            row = queryset.first()
        return car_to_entity(row) if row else None

    def find_by_ids(self, car_ids: Iterable[UUID], lock: bool = False) -> List[Car]:
        queryset = CarModel.objects.filter(pk__in=list(car_ids)).order_by("id")
        if lock:
            queryset = lock_queryset_if_possible(queryset)
        with translate_database_errors("car lookup"):
            return [car_to_entity(row) for row in queryset]

    def list_all(self) -> List[Car]:
        with translate_database_errors("car listing"):
            return [car_to_entity(row) for row in CarModel.objects.order_by("id")]
