"""Serializers for the dashboard statistics endpoint."""

from __future__ import annotations

from datetime import timedelta

from django.utils.dateparse import parse_date  # type: ignore
from rest_framework import serializers  # type: ignore

from shared.api.serializers import TimestampField


class StatsQuerySerializer(serializers.Serializer):
    """``start``/``end`` query bounds; a bare date as ``end`` covers that whole day."""

    start = TimestampField(required=False, allow_null=True)
    end = TimestampField(required=False, allow_null=True)

    def validate_end(self, value):  # type: ignore
        raw = self.initial_data.get('end')
        if value is not None and isinstance(raw, str) and parse_date(raw.strip()) is not None:
            return value + timedelta(days=1) - timedelta(microseconds=1)
        return value


class PeriodSerializer(serializers.Serializer):
    start = serializers.DateTimeField(allow_null=True)
    end = serializers.DateTimeField(allow_null=True)


class TopCarSerializer(serializers.Serializer):
    car_id = serializers.UUIDField()
    name = serializers.CharField(allow_null=True)
    make = serializers.CharField(allow_null=True)
    model = serializers.CharField(allow_null=True)
    bookings = serializers.IntegerField()


class RecentBookingSerializer(serializers.Serializer):
    id = serializers.UUIDField()
    full_name = serializers.CharField()
    car_name = serializers.CharField(allow_null=True)
    pickup_date = serializers.DateTimeField()
    status = serializers.CharField()
    total_price = serializers.DecimalField(max_digits=12, decimal_places=2, allow_null=True)


class StatsSerializer(serializers.Serializer):
    period = PeriodSerializer()
    total_bookings = serializers.IntegerField()
    bookings_by_status = serializers.DictField(child=serializers.IntegerField())
    revenue = serializers.DecimalField(max_digits=14, decimal_places=2)
    top_cars = TopCarSerializer(many=True)
    cars_by_status = serializers.DictField(child=serializers.IntegerField())
    total_cars = serializers.IntegerField()
    active_bookings = serializers.IntegerField()
    completion_rate = serializers.FloatField()
    cancellation_rate = serializers.FloatField()
    occupancy_rate = serializers.FloatField()
    recent_bookings = RecentBookingSerializer(many=True)
