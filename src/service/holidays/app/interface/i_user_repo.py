from abc import ABC, abstractmethod
from typing import Optional

from src.service.holidays.domain.entity.user_entity import UserEntity


class IUserRepo(ABC):
    @abstractmethod
    async def get_by_id(self, *, user_id: str) -> Optional[UserEntity]:
        pass

    @abstractmethod
    async def get_by_email(self, *, email: str) -> Optional[UserEntity]:
        pass

    @abstractmethod
    async def create(self, *, user: UserEntity) -> UserEntity:
        pass

    @abstractmethod
    async def update_password(self, *, user_id: str, hashed_password: str) -> Optional[UserEntity]:
        pass
