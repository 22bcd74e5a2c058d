"""
User API Schemas - Pydantic models for request/response
"""

from pydantic import BaseModel, ConfigDict, EmailStr, Field, SecretStr

from src.service.holidays.domain.entity.user_entity import UserEntity, UserRole


class CreateUserRequest(BaseModel):
    """Create user request schema"""

    model_config = ConfigDict(
        json_schema_extra={
            'example': {
                'email': 'traveller@holidays-planner.com',
                'password': 'P@ssw0rd',
                'name': 'Jane Traveller',
            }
        }
    )

    email: EmailStr
    password: SecretStr = Field(
        ...,
        min_length=6,
        max_length=72,
        description='Password must be 6-72 characters (bcrypt limit)',
    )
    name: str = Field(..., min_length=1, max_length=100)


class LoginRequest(BaseModel):
    """User login request schema"""

    email: EmailStr
    password: SecretStr = Field(..., min_length=1, max_length=72)


class ChangePasswordRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    existing_password: SecretStr = Field(..., alias='existingPwd', min_length=1, max_length=72)
    new_password: SecretStr = Field(..., alias='newPwd', min_length=6, max_length=72)


class ForgotPasswordRequest(BaseModel):
    email: EmailStr


class ResetPasswordRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    new_password: SecretStr = Field(..., alias='newPwd', min_length=6, max_length=72)


class UserResponse(BaseModel):
    """User response schema"""

    model_config = ConfigDict(from_attributes=True, populate_by_name=True)

    id: str
    email: str
    name: str
    role: UserRole
    is_active: bool = Field(..., alias='isActive')

    @classmethod
    def from_entity(cls, user: UserEntity) -> 'UserResponse':
        return cls(
            id=user.id or '',
            email=user.email,
            name=user.name,
            role=user.role,
            is_active=user.is_active,
        )


class UserEnvelope(BaseModel):
    message: str
    user: UserResponse


class LoginResponse(BaseModel):
    message: str
    token: str
    user: UserResponse
