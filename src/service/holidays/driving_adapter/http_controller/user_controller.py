from fastapi import APIRouter, Depends, status

from src.platform.logging.loguru_io import Logger
from src.service.holidays.app.command.change_password_use_case import ChangePasswordUseCase
from src.service.holidays.app.command.login_user_use_case import LoginUserUseCase
from src.service.holidays.app.command.register_user_use_case import RegisterUserUseCase
from src.service.holidays.app.command.reset_password_use_case import ResetPasswordUseCase
from src.service.holidays.app.query.get_current_user_use_case import GetCurrentUserUseCase
from src.service.holidays.domain.entity.user_entity import UserEntity
from src.service.holidays.driving_adapter.http_controller.auth.role_auth import (
    require_authenticated,
)
from src.service.holidays.driving_adapter.http_controller.schema.common_schema import (
    MessageResponse,
)
from src.service.holidays.driving_adapter.http_controller.schema.user_schema import (
    ChangePasswordRequest,
    CreateUserRequest,
    ForgotPasswordRequest,
    LoginRequest,
    LoginResponse,
    ResetPasswordRequest,
    UserEnvelope,
    UserResponse,
)


# === API Router ===

router = APIRouter()


@router.post('', response_model=UserEnvelope, status_code=status.HTTP_201_CREATED)
@Logger.io
async def create_user(
    request: CreateUserRequest,
    use_case: RegisterUserUseCase = Depends(RegisterUserUseCase.depends),
) -> UserEnvelope:
    user_entity = await use_case.register_user(
        email=request.email,
        password=request.password.get_secret_value(),
        name=request.name,
    )
    return UserEnvelope(
        message='User created successfully', user=UserResponse.from_entity(user_entity)
    )


@router.post('/login', response_model=LoginResponse)
@Logger.io
async def login(
    request: LoginRequest,
    use_case: LoginUserUseCase = Depends(LoginUserUseCase.depends),
) -> LoginResponse:
    user_entity, token = await use_case.login(
        email=request.email, password=request.password.get_secret_value()
    )
    return LoginResponse(
        message='Logged in successfully', token=token, user=UserResponse.from_entity(user_entity)
    )


@router.get('/me', response_model=UserEnvelope)
@Logger.io
async def get_me(
    current_user: UserEntity = Depends(require_authenticated),
    use_case: GetCurrentUserUseCase = Depends(GetCurrentUserUseCase.depends),
) -> UserEnvelope:
    user_entity = await use_case.get_current_user(current_user.id or '')
    return UserEnvelope(message='User retrieved successfully', user=UserResponse.from_entity(user_entity))


@router.put('/password', response_model=UserEnvelope)
@Logger.io
async def change_password(
    request: ChangePasswordRequest,
    current_user: UserEntity = Depends(require_authenticated),
    use_case: ChangePasswordUseCase = Depends(ChangePasswordUseCase.depends),
) -> UserEnvelope:
    user_entity = await use_case.change_password(
        user_id=current_user.id or '',
        existing_password=request.existing_password.get_secret_value(),
        new_password=request.new_password.get_secret_value(),
    )
    return UserEnvelope(
        message='Password changed successfully', user=UserResponse.from_entity(user_entity)
    )


@router.post('/forgotpassword', response_model=MessageResponse)
@Logger.io
async def forgot_password(
    request: ForgotPasswordRequest,
    use_case: ResetPasswordUseCase = Depends(ResetPasswordUseCase.depends),
) -> MessageResponse:
    # Same answer whether or not the account exists
    await use_case.request_reset(email=request.email)
    return MessageResponse(message='If the account exists, a reset link has been sent')


@router.patch('/forgotpassword/{token}', response_model=UserEnvelope)
@Logger.io
async def reset_password(
    token: str,
    request: ResetPasswordRequest,
    use_case: ResetPasswordUseCase = Depends(ResetPasswordUseCase.depends),
) -> UserEnvelope:
    user_entity = await use_case.reset_password(
        token=token, new_password=request.new_password.get_secret_value()
    )
    return UserEnvelope(
        message='Password reset successfully', user=UserResponse.from_entity(user_entity)
    )
