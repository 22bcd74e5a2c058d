"""
Identity context: JWT minting and decoding
"""

from datetime import datetime, timedelta, timezone
from typing import Any, Dict, Optional, Tuple

import jwt
from pydantic import SecretStr

from src.platform.exception.exceptions import AuthenticationError, DomainError
from src.service.holidays.domain.entity.user_entity import UserEntity, UserRole


PASSWORD_RESET_PURPOSE = 'password_reset'
INVALID_RESET_TOKEN = 'Invalid or expired reset token'


class JwtAuth:
    def __init__(
        self,
        *,
        secret_key: SecretStr,
        algorithm: str = 'HS256',
        expire_minutes: int = 60 * 24,
        reset_expire_minutes: int = 30,
    ) -> None:
        self.secret = secret_key.get_secret_value()
        self.algorithm = algorithm
        self.expire_minutes = expire_minutes
        self.reset_expire_minutes = reset_expire_minutes

    def create_jwt_token(self, user_entity: UserEntity) -> str:
        now = datetime.now(timezone.utc)
        payload = {
            'sub': str(user_entity.id),
            'exp': now + timedelta(minutes=self.expire_minutes),
            'iat': now,
            'user_id': user_entity.id,
            'email': user_entity.email,
            'name': user_entity.name,
            'role': user_entity.role.value,
            'is_active': user_entity.is_active,
        }

        return jwt.encode(payload, self.secret, algorithm=self.algorithm)

    def decode_jwt_token(self, token: str) -> Dict[str, Any]:
        try:
            return jwt.decode(token, self.secret, algorithms=[self.algorithm])
        except jwt.PyJWTError as e:
            raise AuthenticationError('Unauthenticated') from e

    def get_current_user_info_from_jwt(self, token: Optional[str]) -> UserEntity:
        if not token:
            raise AuthenticationError('Unauthenticated')

        payload = self.decode_jwt_token(token)
        # Purpose-scoped tokens (password reset) never authenticate requests
        if payload.get('purpose'):
            raise AuthenticationError('Unauthenticated')

        user_id = payload.get('user_id')
        email = payload.get('email')
        name = payload.get('name')
        role = payload.get('role')
        is_active = payload.get('is_active')

        if not user_id or not email or not role or is_active is None:
            raise AuthenticationError('Unauthenticated')

        try:
            user_role = UserRole(role)
        except ValueError as e:
            raise AuthenticationError('Unauthenticated') from e

        # Rebuild UserEntity from JWT payload (no DB query)
        user_entity = UserEntity(
            id=str(user_id),
            email=email,
            name=name or '',
            role=user_role,
            is_active=bool(is_active),
        )
        user_entity.validate_active()

        return user_entity

    def create_password_reset_token(self, user_entity: UserEntity) -> str:
        """
        Single-purpose token for the forgot-password link.

        It carries the fingerprint of the password it was issued against, so it
        stops working once the password changes (including through this token).
        """
        now = datetime.now(timezone.utc)
        payload = {
            'sub': str(user_entity.id),
            'purpose': PASSWORD_RESET_PURPOSE,
            'pwd': user_entity.password_fingerprint,
            'exp': now + timedelta(minutes=self.reset_expire_minutes),
            'iat': now,
        }
        return jwt.encode(payload, self.secret, algorithm=self.algorithm)

    def decode_password_reset_token(self, token: str) -> Tuple[str, str]:
        """Return (user_id, password fingerprint) of a valid reset token."""
        try:
            payload = jwt.decode(
                token,
                self.secret,
                algorithms=[self.algorithm],
                options={'require': ['exp', 'sub']},
            )
        except jwt.PyJWTError as e:
            raise DomainError(INVALID_RESET_TOKEN) from e

        if payload.get('purpose') != PASSWORD_RESET_PURPOSE or not payload.get('pwd'):
            raise DomainError(INVALID_RESET_TOKEN)
        return str(payload['sub']), str(payload['pwd'])
