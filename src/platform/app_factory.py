"""
FastAPI app factory shared by the production entrypoint and the test app.

The two differ only in their lifespan, so everything else (routers, error
envelopes, CORS, tracing, health and metrics) is assembled here.
"""

from collections.abc import Awaitable, Callable
from contextlib import AbstractAsyncContextManager
import time
from typing import Any

from fastapi import APIRouter, FastAPI, Request, Response
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import PlainTextResponse
from prometheus_client import CONTENT_TYPE_LATEST, generate_latest

from src.platform.config.core_setting import settings
from src.platform.constant.route_constant import BOOKING_BASE, TOUR_BASE, USER_BASE
from src.platform.exception.exception_handlers import register_exception_handlers
from src.platform.logging.loguru_io import Logger
from src.platform.observability.tracing import TracingConfig
from src.service.holidays.driving_adapter.http_controller.booking_controller import (
    router as booking_router,
)
from src.service.holidays.driving_adapter.http_controller.tour_controller import (
    router as tour_router,
)
from src.service.holidays.driving_adapter.http_controller.user_controller import (
    router as user_router,
)


ROUTERS: tuple[tuple[APIRouter, str, str], ...] = (
    (user_router, USER_BASE, 'user'),
    (tour_router, TOUR_BASE, 'tour'),
    (booking_router, BOOKING_BASE, 'booking'),
)

# Probes are polled constantly; keep them out of the access log
QUIET_PATHS = frozenset({'/health', '/metrics'})


def create_app(
    *,
    lifespan: Callable[[FastAPI], AbstractAsyncContextManager[Any]],
    title_suffix: str = '',
    description: str = 'Tours, bookings and checkout for Holidays Planner',
    service_name: str = 'holidays-planner',
) -> FastAPI:
    """
    Args:
        lifespan: Async context manager for app lifespan (startup/shutdown)
        title_suffix: Optional suffix for app title (e.g., " (Test)")
        service_name: Service name reported on spans
    """
    app = FastAPI(
        title=f'{settings.PROJECT_NAME}{title_suffix}',
        description=description,
        version=settings.VERSION,
        lifespan=lifespan,
    )

    # Instrument before routes are mounted
    TracingConfig(service_name=service_name).instrument_fastapi(app=app)

    app.add_middleware(
        CORSMiddleware,  # type: ignore
        allow_origins=settings.BACKEND_CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=['*'],
        allow_headers=['*'],
    )
    app.middleware('http')(log_requests)

    register_exception_handlers(app)

    for router, prefix, tag in ROUTERS:
        app.include_router(router, prefix=prefix, tags=[tag])

    _register_common_endpoints(app)
    return app


async def log_requests(
    request: Request, call_next: Callable[[Request], Awaitable[Response]]
) -> Response:
    started = time.perf_counter()
    response = await call_next(request)
    if request.url.path not in QUIET_PATHS:
        elapsed_ms = (time.perf_counter() - started) * 1000
        # Route template keeps path secrets (reset tokens) out of the log
        route = request.scope.get('route')
        path = getattr(route, 'path', request.url.path)
        Logger.base.info(
            f'🌐 [HTTP] {request.method} {path} -> {response.status_code} '
            f'({elapsed_ms:.1f} ms)'
        )
    return response


def _register_common_endpoints(app: FastAPI) -> None:
    @app.get('/health', include_in_schema=False)
    async def health_check() -> dict[str, str]:
        return {'status': 'healthy', 'service': settings.PROJECT_NAME}

    @app.get('/metrics', include_in_schema=False)
    async def get_metrics() -> PlainTextResponse:
        return PlainTextResponse(content=generate_latest(), media_type=CONTENT_TYPE_LATEST)
