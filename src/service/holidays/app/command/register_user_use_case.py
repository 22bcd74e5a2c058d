"""
User registration (Use Case Layer)
"""

from datetime import datetime, timezone
from typing import Self

from dependency_injector.wiring import Provide, inject
from fastapi import Depends

from src.platform.config.di import Container
from src.platform.exception.exceptions import ConflictError
from src.platform.logging.loguru_io import Logger
from src.service.holidays.app.interface.i_password_hasher import IPasswordHasher
from src.service.holidays.app.interface.i_user_repo import IUserRepo
from src.service.holidays.domain.entity.user_entity import UserEntity, UserRole


class RegisterUserUseCase:
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
    async def register_user(
        self,
        *,
        email: str,
        password: str,
        name: str,
        role: UserRole = UserRole.STANDARD,
    ) -> UserEntity:
        UserEntity.validate_role(role)
        if await self.user_repo.get_by_email(email=email):
            raise ConflictError(f'User with email {email} already exists')

        user_entity = UserEntity(
            email=email.lower(),
            name=name,
            role=UserRole(role),
            is_active=True,
            created_at=datetime.now(timezone.utc),
        )
        user_entity.set_password(password, self.password_hasher)
        return await self.user_repo.create(user=user_entity)

    @Logger.io
    async def ensure_admin(self, *, email: str, password: str, name: str) -> UserEntity:
        """Create the bootstrap admin unless an account with that e-mail exists."""
        existing = await self.user_repo.get_by_email(email=email)
        if existing:
            return existing

        admin = await self.register_user(
            email=email, password=password, name=name, role=UserRole.ADMIN
        )
        Logger.base.info(f'👤 [BOOTSTRAP] Admin account {admin.email} created')
        return admin
