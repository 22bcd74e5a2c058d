from typing import Self

from dependency_injector.wiring import Provide, inject
from fastapi import Depends

from src.platform.config.di import Container
from src.platform.exception.exceptions import AuthenticationError
from src.platform.logging.loguru_io import Logger
from src.service.holidays.app.interface.i_user_repo import IUserRepo
from src.service.holidays.domain.entity.user_entity import UserEntity


class GetCurrentUserUseCase:
    """Fresh profile for the token holder; a token for a removed account is rejected."""

    def __init__(self, user_repo: IUserRepo):
        self.user_repo = user_repo

    @classmethod
    @inject
    def depends(cls, user_repo: IUserRepo = Depends(Provide[Container.user_repo])) -> Self:
        return cls(user_repo=user_repo)

    @Logger.io
    async def get_current_user(self, user_id: str) -> UserEntity:
        user = await self.user_repo.get_by_id(user_id=user_id)
        if not user:
            raise AuthenticationError('Unauthenticated')
        user.validate_active()
        return user
