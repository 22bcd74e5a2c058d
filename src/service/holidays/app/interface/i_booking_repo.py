from abc import ABC, abstractmethod
from typing import Any, List, Mapping, Optional

from src.service.holidays.domain.entity.booking_entity import Booking


class IBookingRepo(ABC):
    @abstractmethod
    async def get_by_id(self, *, booking_id: str) -> Optional[Booking]:
        pass

    @abstractmethod
    async def list_page(self, *, skip: int, limit: int) -> List[Booking]:
        pass

    @abstractmethod
    async def count(self) -> int:
        pass

    @abstractmethod
    async def list_by_tour(self, *, tour_id: str) -> List[Booking]:
        pass

    @abstractmethod
    async def create(self, *, booking: Booking) -> Booking:
        pass

    @abstractmethod
    async def replace(self, *, booking: Booking) -> Optional[Booking]:
        """Store ``booking`` as the complete new document under its id."""
        pass

    @abstractmethod
    async def patch(self, *, booking_id: str, fields: Mapping[str, Any]) -> Optional[Booking]:
        pass

    @abstractmethod
    async def delete(self, *, booking_id: str) -> Optional[Booking]:
        pass
