from typing import Any, Mapping, Self

from dependency_injector.wiring import Provide, inject
from fastapi import Depends
from opentelemetry import trace

from src.platform.config.di import Container
from src.platform.exception.exceptions import NotFoundError
from src.platform.logging.loguru_io import Logger
from src.platform.metrics.holidays_metrics import metrics
from src.service.holidays.app.command.reference_loader import load_tour, load_user
from src.service.holidays.app.interface.i_booking_repo import IBookingRepo
from src.service.holidays.app.interface.i_tour_repo import ITourRepo
from src.service.holidays.app.interface.i_user_repo import IUserRepo
from src.service.holidays.domain.entity.booking_entity import Booking


class PatchBookingUseCase:
    """
    Partial update of a booking (PATCH).

    Only the given fields change. The booking is read back after the write, so
    the caller sees the stored state rather than the request echo.
    """

    def __init__(
        self,
        *,
        booking_repo: IBookingRepo,
        tour_repo: ITourRepo,
        user_repo: IUserRepo,
    ) -> None:
        self.booking_repo = booking_repo
        self.tour_repo = tour_repo
        self.user_repo = user_repo
        self.tracer = trace.get_tracer(__name__)

    @classmethod
    @inject
    def depends(
        cls,
        booking_repo: IBookingRepo = Depends(Provide[Container.booking_repo]),
        tour_repo: ITourRepo = Depends(Provide[Container.tour_repo]),
        user_repo: IUserRepo = Depends(Provide[Container.user_repo]),
    ) -> Self:
        return cls(booking_repo=booking_repo, tour_repo=tour_repo, user_repo=user_repo)

    @Logger.io
    async def patch_booking(self, *, booking_id: str, fields: Mapping[str, Any]) -> Booking:
        with self.tracer.start_as_current_span(
            'use_case.patch_booking',
            attributes={'booking.id': booking_id, 'booking.fields': sorted(fields)},
        ):
            existing = await self.booking_repo.get_by_id(booking_id=booking_id)
            if not existing:
                raise NotFoundError('Booking not found')

            if 'tour_id' in fields:
                await load_tour(self.tour_repo, fields['tour_id'])
            if 'user_id' in fields:
                await load_user(self.user_repo, fields['user_id'])

            patched = existing.patched_with(fields)

            written = await self.booking_repo.patch(
                booking_id=booking_id,
                fields={**fields, 'status': patched.status, 'updated_at': patched.updated_at},
            )
            if not written:
                metrics.record_booking_write(operation='patch', result='not_found')
                raise NotFoundError('Booking not found')

            refreshed = await self.booking_repo.get_by_id(booking_id=booking_id)
            if not refreshed:
                raise NotFoundError('Booking not found')

            metrics.record_booking_write(operation='patch', result='ok')
            return refreshed
