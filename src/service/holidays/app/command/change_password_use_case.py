from typing import Self

from dependency_injector.wiring import Provide, inject
from fastapi import Depends

from src.platform.config.di import Container
from src.platform.exception.exceptions import DomainError, NotFoundError
from src.platform.logging.loguru_io import Logger
from src.service.holidays.app.interface.i_password_hasher import IPasswordHasher
from src.service.holidays.app.interface.i_user_repo import IUserRepo
from src.service.holidays.domain.entity.user_entity import UserEntity


class ChangePasswordUseCase:
    def __init__(self, *, user_repo: IUserRepo, password_hasher: IPasswordHasher) -> None:
        self.user_repo = user_repo
        self.password_hasher = password_hasher

    @classmethod
    @inject
    def depends(
        cls,
        user_repo: IUserRepo = Depends(Provide[Container.user_repo]),
        password_hasher: IPasswordHasher = Depends(Provide[Container.password_hasher]),
    ) -> Self:
        return cls(user_repo=user_repo, password_hasher=password_hasher)

    @Logger.io
    async def change_password(
        self, *, user_id: str, existing_password: str, new_password: str
    ) -> UserEntity:
        user_entity = await self.user_repo.get_by_id(user_id=user_id)
        if not user_entity:
            raise NotFoundError('User not found')

        if not user_entity.check_password(existing_password, self.password_hasher):
            raise DomainError('Existing password is incorrect')

        user_entity.set_password(new_password, self.password_hasher)
        updated = await self.user_repo.update_password(
            user_id=user_id, hashed_password=user_entity.hashed_password
        )
        if not updated:
            raise NotFoundError('User not found')
        return updated
