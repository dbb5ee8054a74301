"""API views for the car inventory."""

from __future__ import annotations

from django_filters.rest_framework import DjangoFilterBackend  # type: ignore
from rest_framework import permissions, status, viewsets  # type: ignore
from rest_framework.decorators import action  # type: ignore
from rest_framework.pagination import LimitOffsetPagination  # type: ignore
from rest_framework.response import Response  # type: ignore

from apps.bookings.repositories import DjangoBookingRepository
from shared.api.mixins import RepresentationMixin, request_object
from shared.domain.exceptions import NotFoundError
from shared.domain.validation import parse_identifier

from .application.command_handlers import (
    BulkDeleteCarsCommand,
    BulkDeleteCarsHandler,
    BulkUpdateCarsCommand,
    BulkUpdateCarsHandler,
    CreateCarCommand,
    CreateCarHandler,
    DeleteCarCommand,
    DeleteCarHandler,
    UpdateCarCommand,
    UpdateCarHandler,
)
from .filters import CarFilterSet
from .models import Car
from .repositories import DjangoCarRepository, car_to_entity
from .serializers import parse_car_ids

UUID_PATTERN = r"[0-9a-fA-F-]{32,36}"


class CarViewSet(RepresentationMixin, viewsets.GenericViewSet):
    """Public car listing; every write is reserved for administrators."""

    queryset = Car.objects.all()
    resource = "car"
    filter_backends = [DjangoFilterBackend]
    filterset_class = CarFilterSet
    pagination_class = LimitOffsetPagination
    lookup_value_regex = UUID_PATTERN

    def get_permissions(self):  # type: ignore
        if self.action in ("list", "retrieve"):
            return [permissions.AllowAny()]
        return [permissions.IsAdminUser()]

    def _car_id(self, pk):
        return parse_identifier(pk, "id")

    def list(self, request, *args, **kwargs):  # type: ignore
        queryset = self.filter_queryset(self.get_queryset())
        page = self.paginate_queryset(queryset)
        rows = page if page is not None else queryset
        serializer = self.get_serializer([car_to_entity(row) for row in rows], many=True)
        if page is not None:
            return self.get_paginated_response(serializer.data)
        return Response(serializer.data)


    def retrieve(self, request, pk=None, *args, **kwargs):  # type: ignore
        car_id = self._car_id(pk)
        car = DjangoCarRepository().find_by_id(car_id)
        if car is None:
            raise NotFoundError("Car", car_id)
        return Response(self.get_serializer(car).data)

    def create(self, request, *args, **kwargs):  # type: ignore
        payload = self.get_representation().car_payload(request_object(request.data))
        car = CreateCarHandler(DjangoCarRepository()).handle(CreateCarCommand(payload=payload))
        return Response(self.get_serializer(car).data, status=status.HTTP_201_CREATED)

    def update(self, request, pk=None, *args, **kwargs):  # type: ignore
        payload = self.get_representation().car_payload(request_object(request.data))
        car = UpdateCarHandler(DjangoCarRepository()).handle(
            UpdateCarCommand(car_id=self._car_id(pk), payload=payload)
        )
        return Response(self.get_serializer(car).data)

    def partial_update(self, request, pk=None, *args, **kwargs):  # type: ignore
        return self.update(request, pk, *args, **kwargs)

    def destroy(self, request, pk=None, *args, **kwargs):  # type: ignore
        handler = DeleteCarHandler(DjangoCarRepository(), DjangoBookingRepository())
        car = handler.handle(DeleteCarCommand(car_id=self._car_id(pk)))
        return Response(self.get_serializer(car).data, status=status.HTTP_200_OK)

    @action(detail=False, methods=["post"], url_path="bulk-delete")
    def bulk_delete(self, request):  # type: ignore
        car_ids = parse_car_ids(request_object(request.data).get("ids"))
        handler = BulkDeleteCarsHandler(DjangoCarRepository(), DjangoBookingRepository())
        result = handler.handle(BulkDeleteCarsCommand(car_ids=car_ids))
        return Response(
            {
                "deleted": self.get_serializer(result.deleted, many=True).data,
                "skipped": [str(car_id) for car_id in result.skipped],
                "missing": [str(car_id) for car_id in result.missing],
                "deleted_count": result.deleted_count,
                "skipped_count": result.skipped_count,
            },
            status=status.HTTP_200_OK,
        )

    @action(detail=False, methods=["post"], url_path="bulk-update")
    def bulk_update(self, request):  # type: ignore
        data = request_object(request.data)
        car_ids = parse_car_ids(data.get("ids"))
        changes = self.get_representation().car_payload(request_object(data.get("changes"), field="changes"))
        result = BulkUpdateCarsHandler(DjangoCarRepository()).handle(
            BulkUpdateCarsCommand(car_ids=car_ids, payload=changes)
        )
        return Response(
            {
                "updated": self.get_serializer(result.updated, many=True).data,
                "missing": [str(car_id) for car_id in result.missing],
            },
            status=status.HTTP_200_OK,
        )
