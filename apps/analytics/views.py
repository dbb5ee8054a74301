"""API views for analytics.

Exposes the admin dashboard statistics computed by ``StatsAggregator``.
"""

from __future__ import annotations

from rest_framework.permissions import IsAdminUser  # type: ignore
from rest_framework.response import Response  # type: ignore
from rest_framework.views import APIView  # type: ignore

from apps.bookings.repositories import DjangoBookingRepository
from apps.fleet.repositories import DjangoCarRepository
from shared.api.serializers import validate_with

from .serializers import StatsQuerySerializer, StatsSerializer
from .services import StatsAggregator


class StatsView(APIView):
    """Booking and fleet statistics for the admin dashboard."""

    permission_classes = [IsAdminUser]

    def get(self, request, format=None):  # type: ignore
        bounds = validate_with(StatsQuerySerializer, request.query_params)

        aggregator = StatsAggregator(DjangoCarRepository(), DjangoBookingRepository())
        stats = aggregator.compute_stats(bounds.get("start"), bounds.get("end"))
        return Response(StatsSerializer(stats).data)
