"""
Booking Status Machine

Only PENDING has outgoing transitions; every other status is terminal.
Transitions are triggered by administrators, never by the passage of time.
"""

from typing import Dict, FrozenSet

from shared.domain.exceptions import FieldError, ValidationError

from .entities import Booking, BookingStatus
from .events import BookingStatusChanged

TRANSITIONS: Dict[BookingStatus, FrozenSet[BookingStatus]] = {
    BookingStatus.PENDING: frozenset({
        BookingStatus.CONFIRMED,
        BookingStatus.COMPLETED,
        BookingStatus.CANCELLED,
    }),
    BookingStatus.CONFIRMED: frozenset(),
    BookingStatus.COMPLETED: frozenset(),
    BookingStatus.CANCELLED: frozenset(),
}


class BookingStatusMachine:

    def __init__(self, transitions: Dict[BookingStatus, FrozenSet[BookingStatus]] = TRANSITIONS):
        self.transitions = transitions

    def can_transition(self, current: BookingStatus, target: BookingStatus) -> bool:
        return current == target or target in self.transitions.get(current, frozenset())

    def allowed_targets(self, current: BookingStatus) -> FrozenSet[BookingStatus]:
        return self.transitions.get(current, frozenset())

    def transition(self, booking: Booking, target: BookingStatus) -> bool:
        """
        Move the booking to ``target``

        Returns False when the booking already has that status (no-op),
        True when the status changed. Raises ValidationError when the
        transition is not allowed; the booking is left untouched.
        """
        current = booking.status
        if current == target:
            return False

        if not self.can_transition(current, target):
            raise ValidationError([
                FieldError(
                    field='status',
                    code=FieldError.INVALID_TRANSITION,
                    message=f"Cannot change status from {current.value} to {target.value}",
                    value=target.value,
                )
            ])

        booking.status = target
        booking.add_event(BookingStatusChanged(
            aggregate_id=booking.id,
            booking_id=booking.id,
            old_status=current.value,
            new_status=target.value,
        ))
        return True
