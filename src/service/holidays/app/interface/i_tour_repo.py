from abc import ABC, abstractmethod
from typing import Any, List, Mapping, Optional

from src.service.holidays.domain.entity.tour_entity import Tour


class ITourRepo(ABC):
    @abstractmethod
    async def get_by_id(self, *, tour_id: str) -> Optional[Tour]:
        pass

    @abstractmethod
    async def list_page(self, *, skip: int, limit: int) -> List[Tour]:
        pass

    @abstractmethod
    async def count(self) -> int:
        pass

    @abstractmethod
    async def create(self, *, tour: Tour) -> Tour:
        pass

    @abstractmethod
    async def replace(self, *, tour: Tour) -> Optional[Tour]:
        pass

    @abstractmethod
    async def patch(self, *, tour_id: str, fields: Mapping[str, Any]) -> Optional[Tour]:
        pass

    @abstractmethod
    async def delete(self, *, tour_id: str) -> Optional[Tour]:
        pass
