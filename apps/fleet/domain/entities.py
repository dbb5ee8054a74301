"""
Fleet Domain Entities

- Car: a rentable vehicle in the inventory
- CarStatus: availability of a car for new bookings
- CarChanges: a validated patch applied to one or many cars
"""

from dataclasses import dataclass, field
from decimal import Decimal
from enum import Enum
from typing import Any, Dict, List

from shared.domain.base import Aggregate


class CarStatus(Enum):
    ACTIVE = 'active'            # Bookable
    MAINTENANCE = 'maintenance'  # Temporarily out of service
    INACTIVE = 'inactive'        # Withdrawn from the fleet

    @classmethod
    def values(cls) -> List[str]:
        return [member.value for member in cls]


@dataclass(kw_only=True, eq=False)
class Car(Aggregate):
    """
    Car Aggregate Root

    Key invariants:
    - seats is positive, luggage and price_per_day are non-negative
    - images never contains None, "null" or empty entries
    """

    name: str
    category: str = ''
    make: str | None = None
    model: str | None = None
    year: int | None = None
    fuel_type: str = ''
    seats: int = 4
    luggage: int = 0
    price_per_day: Decimal = Decimal('0')
    status: CarStatus = CarStatus.ACTIVE
    features: List[str] = field(default_factory=list)
    images: List[str] = field(default_factory=list)

    @property
    def display_name(self) -> str:
        if self.name:
            return self.name
        return ' '.join(part for part in (self.make, self.model) if part)

    @property
    def is_bookable(self) -> bool:
        return self.status == CarStatus.ACTIVE

    def __str__(self):
        return f"Car {self.display_name} ({self.status.value})"


@dataclass(frozen=True)
class CarChanges:
    """
    A validated partial update for one or many cars

    A change that leaves a car without a name falls back to
    "make model", the same as on create.
    """

    changes: Dict[str, Any] = field(default_factory=dict)

    def __bool__(self):
        return bool(self.changes)

    def apply(self, car: Car) -> Car:
        for name, value in self.changes.items():
            setattr(car, name, list(value) if isinstance(value, list) else value)
        if not car.name:
            car.name = car.display_name
        return car
