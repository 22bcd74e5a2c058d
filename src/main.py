"""
Production FastAPI Application

Document store, background notification task group and bootstrap admin.
"""

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

import anyio
from fastapi import FastAPI
from fastapi.responses import RedirectResponse

from src.platform.app_factory import create_app
from src.platform.config.core_setting import Settings
from src.platform.config.di import container
from src.platform.config.wire_modules import WIRE_MODULES
from src.platform.logging.loguru_io import Logger
from src.platform.observability.tracing import TracingConfig
from src.service.holidays.app.command.register_user_use_case import RegisterUserUseCase


async def ensure_bootstrap_admin(settings: Settings) -> None:
    password = settings.FIRST_ADMIN_PASSWORD.get_secret_value()
    if not settings.FIRST_ADMIN_EMAIL or not password:
        Logger.base.info('⏭️  [Holidays] No bootstrap admin configured')
        return

    use_case = RegisterUserUseCase(
        user_repo=container.user_repo(), password_hasher=container.password_hasher()
    )
    await use_case.ensure_admin(
        email=settings.FIRST_ADMIN_EMAIL, password=password, name=settings.FIRST_ADMIN_NAME
    )


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Manage application lifespan: startup and shutdown."""
    Logger.base.info('🚀 [Holidays] Starting up...')

    tracing = TracingConfig(service_name='holidays-planner')
    tracing.setup()

    container.wire(modules=WIRE_MODULES)
    Logger.base.info('🔌 [Holidays] Dependency injection wired')

    settings = container.config_service()
    if settings.DOCUMENT_STORE == 'sql':
        database = container.database()
        await database.create_tables()
        tracing.instrument_sqlalchemy(engine=database.engine)
        Logger.base.info('🗄️  [Holidays] SQL document store ready + instrumented')
    else:
        Logger.base.info('🧠 [Holidays] In-memory document store in use')

    await ensure_bootstrap_admin(settings)

    # Notifications run here; leaving the block waits for in-flight sends
    async with anyio.create_task_group() as tg:
        container.task_group.override(tg)
        Logger.base.info('✅ [Holidays] Ready to serve requests')

        yield

        Logger.base.info('🛑 [Holidays] Shutting down...')

    container.task_group.reset_override()

    if settings.DOCUMENT_STORE == 'sql':
        await container.database().dispose()
        Logger.base.info('🗄️  [Holidays] Database engine disposed')

    tracing.shutdown()
    Logger.base.info('📊 [Holidays] Tracing shutdown complete')

    container.unwire()

    Logger.base.info('👋 [Holidays] Shutdown complete')


# Create FastAPI app using shared factory
app = create_app(lifespan=lifespan)


@app.get('/')
async def root() -> RedirectResponse:
    """Root endpoint - redirect to docs."""
    return RedirectResponse(url='/docs')
