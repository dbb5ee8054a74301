"""Django ORM implementation of the booking repository."""

from __future__ import annotations

from datetime import datetime
from decimal import Decimal
from typing import Iterable, List, Set
from uuid import UUID

from shared.infrastructure.orm import lock_queryset_if_possible, translate_database_errors

from .domain.entities import Booking, BookingStatus, TripType
from .domain.repositories import AbstractBookingRepository
from .models import Booking as BookingModel

PERSISTED_FIELDS = (
    "pickup_location",
    "dropoff_location",
    "pickup_date",
    "return_pickup_location",
    "return_dropoff_location",
    "return_date",
    "passengers",
    "car_id",
    "full_name",
    "email",
    "phone",
    "notes",
    "total_price",
)


def booking_to_entity(row: BookingModel) -> Booking:
    return Booking(
        id=row.id,
        trip_type=TripType(row.trip_type),
        pickup_location=row.pickup_location,
        dropoff_location=row.dropoff_location or "",
        pickup_date=row.pickup_date,
        return_pickup_location=row.return_pickup_location,
        return_dropoff_location=row.return_dropoff_location,
        return_date=row.return_date,
        passengers=row.passengers,
        car_id=row.car_id,
        full_name=row.full_name,
        email=row.email,
        phone=row.phone,
        notes=row.notes or "",
        status=BookingStatus(row.status),
        total_price=Decimal(row.total_price),
        created_at=row.created_at,
        updated_at=row.updated_at,
    )


def _column_values(booking: Booking) -> dict:
    values = {name: getattr(booking, name) for name in PERSISTED_FIELDS}
    values["trip_type"] = booking.trip_type.value
    values["status"] = booking.status.value
    if values["total_price"] is None:
        values["total_price"] = Decimal("0.00")
    return values


class DjangoBookingRepository(AbstractBookingRepository):
    """Booking persistence backed by ``apps.bookings.models.Booking``."""

    def insert(self, booking: Booking) -> Booking:
        with translate_database_errors("booking insert"):
            row = BookingModel.objects.create(id=booking.id, **_column_values(booking))
        return booking_to_entity(row)

    def save(self, booking: Booking) -> Booking:
        with translate_database_errors("booking update"):
            row = BookingModel.objects.get(pk=booking.id)
            for name, value in _column_values(booking).items():
                setattr(row, name, value)
            row.save()
        return booking_to_entity(row)

    def delete_by_id(self, booking_id: UUID) -> bool:
        with translate_database_errors("booking delete"):
            deleted, _ = BookingModel.objects.filter(pk=booking_id).delete()
        return deleted > 0

    def find_by_id(self, booking_id: UUID, lock: bool = False) -> Booking | None:
        queryset = BookingModel.objects.filter(pk=booking_id)
        if lock:
            queryset = lock_queryset_if_possible(queryset)
        with translate_database_errors("booking lookup"):
            row = queryset.first()
        return booking_to_entity(row) if row else None

    def query_by_date_range(self, start: datetime | None, end: datetime | None) -> List[Booking]:
        queryset = BookingModel.objects.all()
        if start is not None:
            queryset = queryset.filter(created_at__gte=start)
        if end is not None:
            queryset = queryset.filter(created_at__lte=end)
        with translate_database_errors("booking range query"):
            return [booking_to_entity(row) for row in queryset.order_by("-created_at")]

    def count_for_car(self, car_id: UUID) -> int:
        with translate_database_errors("booking reference count"):
            return BookingModel.objects.filter(car_id=car_id).count()

    def referenced_car_ids(self, car_ids: Iterable[UUID]) -> Set[UUID]:
        ids = list(car_ids)
        if not ids:
            return set()
        with translate_database_errors("booking reference lookup"):
            return set(
                BookingModel.objects.filter(car_id__in=ids)
                .order_by()
                .values_list("car_id", flat=True)
                .distinct()
            )
