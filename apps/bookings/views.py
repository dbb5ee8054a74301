"""API views for the booking domain."""

from __future__ import annotations

from django_filters.rest_framework import DjangoFilterBackend  # type: ignore
from rest_framework import permissions, status, viewsets  # type: ignore
from rest_framework.decorators import action  # type: ignore
from rest_framework.pagination import LimitOffsetPagination  # type: ignore
from rest_framework.response import Response  # type: ignore

from apps.fleet.repositories import DjangoCarRepository, car_to_entity
from shared.api.mixins import RepresentationMixin, request_object
from shared.domain.exceptions import NotFoundError
from shared.domain.validation import parse_identifier

from .application.command_handlers import (
    CreateBookingCommand,
    CreateBookingHandler,
    DeleteBookingCommand,
    DeleteBookingHandler,
    UpdateBookingCommand,
    UpdateBookingHandler,
    UpdateBookingStatusCommand,
    UpdateBookingStatusHandler,
)
from .filters import BookingFilterSet
from .models import Booking
from .repositories import DjangoBookingRepository, booking_to_entity

UUID_PATTERN = r"[0-9a-fA-F-]{32,36}"


class BookingViewSet(RepresentationMixin, viewsets.GenericViewSet):
    """Anyone may submit a booking; reading and changing them is for administrators."""

    queryset = Booking.objects.select_related("car").all()
    resource = "booking"
    filter_backends = [DjangoFilterBackend]
    filterset_class = BookingFilterSet
    pagination_class = LimitOffsetPagination
    lookup_value_regex = UUID_PATTERN

    def get_permissions(self):  # type: ignore
        if self.action == "create":
            return [permissions.AllowAny()]
        return [permissions.IsAdminUser()]

    def _render(self, booking, car=None):
        if car is None:
            car = DjangoCarRepository().find_by_id(booking.car_id)
        cars = {car.id: car} if car is not None else {}
        return self.get_serializer(booking, context={**self.get_serializer_context(), "cars": cars}).data

    def list(self, request, *args, **kwargs):  # type: ignore
        queryset = self.filter_queryset(self.get_queryset())
        page = self.paginate_queryset(queryset)
        rows = list(page if page is not None else queryset)
        cars = {row.car_id: car_to_entity(row.car) for row in rows}
        serializer = self.get_serializer(
            [booking_to_entity(row) for row in rows],
            many=True,
            context={**self.get_serializer_context(), "cars": cars},
        )
        if page is not None:
            return self.get_paginated_response(serializer.data)
        return Response(serializer.data)

    def retrieve(self, request, pk=None, *args, **kwargs):  # type: ignore
        booking_id = parse_identifier(pk, "id")
        booking = DjangoBookingRepository().find_by_id(booking_id)
        if booking is None:
            raise NotFoundError("Booking", booking_id)
        return Response(self._render(booking))

    def create(self, request, *args, **kwargs):  # type: ignore
        payload = self.get_representation().booking_payload(request_object(request.data))
        handler = CreateBookingHandler(DjangoCarRepository(), DjangoBookingRepository())
        booking = handler.handle(CreateBookingCommand(payload=payload))
        return Response(self._render(booking), status=status.HTTP_201_CREATED)

    def partial_update(self, request, pk=None, *args, **kwargs):  # type: ignore
        payload = self.get_representation().booking_payload(request_object(request.data))
        handler = UpdateBookingHandler(DjangoCarRepository(), DjangoBookingRepository())
        booking = handler.handle(
            UpdateBookingCommand(booking_id=parse_identifier(pk, "id"), payload=payload)
        )
        return Response(self._render(booking))

    def destroy(self, request, pk=None, *args, **kwargs):  # type: ignore
        handler = DeleteBookingHandler(DjangoBookingRepository())
        booking = handler.handle(DeleteBookingCommand(booking_id=parse_identifier(pk, "id")))
        return Response(self._render(booking), status=status.HTTP_200_OK)

    @action(detail=True, methods=["put", "patch"], url_path="status")
    def change_status(self, request, pk=None):  # type: ignore
        data = request_object(request.data)
        handler = UpdateBookingStatusHandler(DjangoBookingRepository())
        booking = handler.handle(
            UpdateBookingStatusCommand(booking_id=parse_identifier(pk, "id"), status=data.get("status"))
        )
        return Response(self._render(booking))
