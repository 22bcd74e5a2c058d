from datetime import datetime
from enum import Enum
import hashlib
from typing import Optional

import attrs
from pydantic import SecretStr

from src.platform.exception.exceptions import (
    AuthenticationError,
    DomainError,
    LoginError,
)
from src.service.holidays.app.interface.i_password_hasher import IPasswordHasher


class UserRole(str, Enum):
    STANDARD = 'standard'
    ADMIN = 'admin'


@attrs.define
class UserEntity:
    email: str = ''
    name: str = ''
    hashed_password: str = attrs.field(default='', repr=False)  # Hide from repr for security
    id: Optional[str] = None
    role: UserRole = UserRole.STANDARD
    is_active: bool = True
    created_at: Optional[datetime] = None

    @property
    def is_admin(self) -> bool:
        return self.role == UserRole.ADMIN

    @property
    def first_name(self) -> str:
        parts = self.name.split()
        return parts[0] if parts else self.name

    @property
    def password_fingerprint(self) -> str:
        """Short digest of the stored hash; it changes whenever the password does."""
        return hashlib.sha256(self.hashed_password.encode()).hexdigest()[:16]

    def validate_active(self) -> None:
        if not self.is_active:
            raise AuthenticationError('User is inactive')

    @staticmethod
    def validate_user_exists(user_entity: Optional['UserEntity']) -> 'UserEntity':
        if not user_entity:
            raise LoginError('LOGIN_BAD_CREDENTIALS')

        return user_entity

    @staticmethod
    def validate_role(role: UserRole | str) -> None:
        valid_roles = [r.value for r in UserRole]
        if role not in valid_roles:
            raise DomainError(f'Invalid role: {role}. Must be one of: {", ".join(valid_roles)}')

    def set_password(self, plain_password: str, password_hasher: IPasswordHasher) -> None:
        if not isinstance(password_hasher, IPasswordHasher):
            raise TypeError('password_hasher must implement IPasswordHasher')
        if len(plain_password) < 6:
            raise DomainError('Password must be at least 6 characters long')

        self.hashed_password = password_hasher.hash_password(
            plain_password=SecretStr(plain_password)
        )

    def check_password(self, plain_password: str, password_hasher: IPasswordHasher) -> bool:
        if not self.hashed_password:
            return False
        return password_hasher.verify_password(
            plain_password=SecretStr(plain_password), hashed_password=self.hashed_password
        )
