"""
Car Repository Interface

The persistence collaborator the fleet domain depends on.
Implementations are injected into guards and command handlers.
"""

from abc import ABC, abstractmethod
from typing import Iterable, List
from uuid import UUID

from .entities import Car, CarChanges


class AbstractCarRepository(ABC):

    @abstractmethod
    def insert(self, car: Car) -> Car:
        """Persist a new car"""

    @abstractmethod
    def update_by_id(self, car_id: UUID, changes: CarChanges) -> Car | None:
        """Apply changes to a stored car; None when it does not exist"""

    @abstractmethod
    def delete_by_id(self, car_id: UUID) -> bool:
        """Delete one car; False when it did not exist"""

    @abstractmethod
    def delete_by_ids(self, car_ids: Iterable[UUID]) -> int:
        """Delete several cars, returning how many were removed"""

    @abstractmethod
    def find_by_id(self, car_id: UUID, lock: bool = False) -> Car | None:
        """Load one car, optionally locking its row until commit"""

    @abstractmethod
    def find_by_ids(self, car_ids: Iterable[UUID], lock: bool = False) -> List[Car]:
        """Load the existing cars among the given ids"""

    @abstractmethod
    def list_all(self) -> List[Car]:
        """Every car regardless of status"""
