"""
Common Value Objects

- DateTimeRange: a reporting period with optionally open bounds
"""

from dataclasses import dataclass
from datetime import datetime, timedelta

from shared.domain.exceptions import FieldError, ValidationError


@dataclass(frozen=True)
class DateTimeRange:
    """
    Date-time range value object

    Both bounds are inclusive. A bound of ``None`` leaves that side open,
    so ``DateTimeRange(None, None)`` contains every instant.
    """
    start: datetime | None = None
    end: datetime | None = None

    def __post_init__(self):
        if self.start is not None and self.end is not None and self.start > self.end:
            raise ValidationError([
                FieldError(
                    field='start',
                    code=FieldError.INVALID,
                    message=f"Start ({self.start.isoformat()}) must not be after end ({self.end.isoformat()})",
                    value=self.start.isoformat(),
                )
            ])

    @classmethod
    def resolve(cls, start: datetime | None, end: datetime | None, *, now: datetime,
                default_days: int = 30) -> 'DateTimeRange':
        """
        Build the reporting window from caller supplied bounds

        Without any bound the window is the ``default_days`` ending at ``now``.
        With exactly one bound the other side stays open.
        """
        if start is None and end is None:
            return cls(now - timedelta(days=default_days), now)
        return cls(start, end)

    def contains(self, moment: datetime) -> bool:
        if self.start is not None and moment < self.start:
            return False
        if self.end is not None and moment > self.end:
            return False
        return True

    def __str__(self):
        start = self.start.isoformat() if self.start else '-inf'
        end = self.end.isoformat() if self.end else '+inf'
        return f"{start} .. {end}"
