"""
Domain event handlers

Subscribed to the message bus from ``BookingsConfig.ready()``; they
write an audit trail of what happened to bookings and cars.
"""

import logging

from shared.application.message_bus import MessageBus

from .domain.events import BookingCreated, BookingDeleted, BookingStatusChanged, CarDeleted, CarsBulkDeleted

logger = logging.getLogger(__name__)


def log_booking_created(event: BookingCreated):
    logger.info(
        f"Booking {event.booking_id} created for car {event.car_id}, total {event.total_price}",
        extra={"domain_event": event.to_dict()},
    )


def log_booking_status_changed(event: BookingStatusChanged):
    logger.info(
        f"Booking {event.booking_id} status {event.old_status} -> {event.new_status}",
        extra={"domain_event": event.to_dict()},
    )


def log_booking_deleted(event: BookingDeleted):
    logger.info(f"Booking {event.booking_id} for car {event.car_id} deleted", extra={"domain_event": event.to_dict()})


def log_car_deleted(event: CarDeleted):
    logger.info(f"Car {event.car_id} removed from the fleet", extra={"domain_event": event.to_dict()})


def log_cars_bulk_deleted(event: CarsBulkDeleted):
    logger.info(
        f"Bulk delete removed {len(event.deleted_ids)} cars, skipped {event.skipped_ids}",
        extra={"domain_event": event.to_dict()},
    )


def register_event_handlers(bus: MessageBus):
    bus.register_event_handler(BookingCreated, log_booking_created)
    bus.register_event_handler(BookingStatusChanged, log_booking_status_changed)
    bus.register_event_handler(BookingDeleted, log_booking_deleted)
    bus.register_event_handler(CarDeleted, log_car_deleted)
    bus.register_event_handler(CarsBulkDeleted, log_cars_bulk_deleted)
