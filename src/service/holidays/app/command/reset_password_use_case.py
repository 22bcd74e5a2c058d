from typing import Self

from dependency_injector.wiring import Provide, inject
from fastapi import Depends

from src.platform.config.core_setting import Settings
from src.platform.config.di import Container
from src.platform.exception.exceptions import DomainError, NotFoundError
from src.platform.logging.loguru_io import Logger
from src.service.holidays.app.interface.i_booking_notifier import INotificationDispatcher
from src.service.holidays.app.interface.i_password_hasher import IPasswordHasher
from src.service.holidays.app.interface.i_user_repo import IUserRepo
from src.service.holidays.domain.entity.user_entity import UserEntity
from src.service.holidays.driving_adapter.http_controller.auth.jwt_auth import (
    INVALID_RESET_TOKEN,
    JwtAuth,
)


class ResetPasswordUseCase:
    """
    Forgot-password flow

    1. request_reset: mail a signed, short-lived link to the account owner.
       Unknown or inactive e-mails get the same silent success.
    2. reset_password: the token must match the password it was issued against,
       so a link works once and dies with any later password change.
    """

    def __init__(
        self,
        *,
        user_repo: IUserRepo,
        password_hasher: IPasswordHasher,
        jwt_auth: JwtAuth,
        notification_dispatcher: INotificationDispatcher,
        reset_url_template: str,
    ) -> None:
        self.user_repo = user_repo
        self.password_hasher = password_hasher
        self.jwt_auth = jwt_auth
        self.notification_dispatcher = notification_dispatcher
        self.reset_url_template = reset_url_template

    @classmethod
    @inject
    def depends(
        cls,
        user_repo: IUserRepo = Depends(Provide[Container.user_repo]),
        password_hasher: IPasswordHasher = Depends(Provide[Container.password_hasher]),
        jwt_auth: JwtAuth = Depends(Provide[Container.jwt_auth]),
        notification_dispatcher: INotificationDispatcher = Depends(
            Provide[Container.notification_dispatcher]
        ),
        settings: Settings = Depends(Provide[Container.config_service]),
    ) -> Self:
        return cls(
            user_repo=user_repo,
            password_hasher=password_hasher,
            jwt_auth=jwt_auth,
            notification_dispatcher=notification_dispatcher,
            reset_url_template=settings.PASSWORD_RESET_URL,
        )

    @Logger.io
    async def request_reset(self, *, email: str) -> None:
        user_entity = await self.user_repo.get_by_email(email=email)
        if not user_entity or not user_entity.is_active:
            Logger.base.info('🔑 [RESET] No active account for the requested e-mail')
            return

        token = self.jwt_auth.create_password_reset_token(user_entity)
        self.notification_dispatcher.dispatch_password_reset(
            email=user_entity.email,
            display_name=user_entity.name,
            reset_url=self.reset_url_template.format(token=token),
        )

    @Logger.io
    async def reset_password(self, *, token: str, new_password: str) -> UserEntity:
        user_id, fingerprint = self.jwt_auth.decode_password_reset_token(token)

        user_entity = await self.user_repo.get_by_id(user_id=user_id)
        if not user_entity or user_entity.password_fingerprint != fingerprint:
            raise DomainError(INVALID_RESET_TOKEN)
        user_entity.validate_active()

        user_entity.set_password(new_password, self.password_hasher)
        updated = await self.user_repo.update_password(
            user_id=user_id, hashed_password=user_entity.hashed_password
        )
        if not updated:
            raise NotFoundError('User not found')
        return updated
