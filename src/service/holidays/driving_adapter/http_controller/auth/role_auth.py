from typing import Optional

from dependency_injector.wiring import Provide, inject
from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from opentelemetry import trace

from src.platform.config.di import Container
from src.platform.exception.exceptions import AdminRequiredError
from src.service.holidays.domain.entity.user_entity import UserEntity, UserRole
from src.service.holidays.driving_adapter.http_controller.auth.jwt_auth import JwtAuth


bearer_scheme = HTTPBearer(auto_error=False)


class RoleAuthStrategy:
    @staticmethod
    def is_admin(user: UserEntity) -> bool:
        return user.role == UserRole.ADMIN


@inject
async def get_current_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
    jwt_auth: JwtAuth = Depends(Provide[Container.jwt_auth]),
) -> UserEntity:
    """Stateless: the user is rebuilt from the token claims."""
    token = credentials.credentials if credentials else None
    return jwt_auth.get_current_user_info_from_jwt(token)


async def require_authenticated(
    current_user: UserEntity = Depends(get_current_user),
) -> UserEntity:
    return current_user


async def require_admin(current_user: UserEntity = Depends(require_authenticated)) -> UserEntity:
    tracer = trace.get_tracer(__name__)
    with tracer.start_as_current_span(
        'auth.require_admin',
        attributes={
            'user.id': current_user.id or '',
            'user.role': current_user.role.value,
        },
    ):
        if not RoleAuthStrategy.is_admin(current_user):
            raise AdminRequiredError()
        return current_user

