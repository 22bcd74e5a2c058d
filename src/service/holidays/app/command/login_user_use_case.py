from typing import Self, Tuple

from dependency_injector.wiring import Provide, inject
from fastapi import Depends

from src.platform.config.di import Container
from src.platform.exception.exceptions import LoginError
from src.platform.logging.loguru_io import Logger
from src.service.holidays.app.interface.i_password_hasher import IPasswordHasher
from src.service.holidays.app.interface.i_user_repo import IUserRepo
from src.service.holidays.domain.entity.user_entity import UserEntity
from src.service.holidays.driving_adapter.http_controller.auth.jwt_auth import JwtAuth


class LoginUserUseCase:
    def __init__(
        self,
        *,
        user_repo: IUserRepo,
        password_hasher: IPasswordHasher,
        jwt_auth: JwtAuth,
    ) -> None:
        self.user_repo = user_repo
        self.password_hasher = password_hasher
        self.jwt_auth = jwt_auth

    @classmethod
    @inject
    def depends(
        cls,
        user_repo: IUserRepo = Depends(Provide[Container.user_repo]),
        password_hasher: IPasswordHasher = Depends(Provide[Container.password_hasher]),
        jwt_auth: JwtAuth = Depends(Provide[Container.jwt_auth]),
    ) -> Self:
        return cls(user_repo=user_repo, password_hasher=password_hasher, jwt_auth=jwt_auth)

    @Logger.io
    async def login(self, *, email: str, password: str) -> Tuple[UserEntity, str]:
        user_entity = UserEntity.validate_user_exists(
            await self.user_repo.get_by_email(email=email)
        )
        if not user_entity.check_password(password, self.password_hasher):
            raise LoginError('LOGIN_BAD_CREDENTIALS')
        user_entity.validate_active()

        return user_entity, self.jwt_auth.create_jwt_token(user_entity)
