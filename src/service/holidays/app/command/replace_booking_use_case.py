from typing import Optional, Self

from dependency_injector.wiring import Provide, inject
from fastapi import Depends
from opentelemetry import trace

from src.platform.config.di import Container
from src.platform.exception.exceptions import ForbiddenError, NotFoundError
from src.platform.logging.loguru_io import Logger
from src.platform.metrics.holidays_metrics import metrics
from src.service.holidays.app.command.reference_loader import load_tour, load_user
from src.service.holidays.app.interface.i_booking_repo import IBookingRepo
from src.service.holidays.app.interface.i_tour_repo import ITourRepo
from src.service.holidays.app.interface.i_user_repo import IUserRepo
from src.service.holidays.domain.entity.booking_entity import Booking
from src.service.holidays.domain.entity.user_entity import UserEntity


class ReplaceBookingUseCase:
    """
    Full replace of a booking (PUT).

    Every writable field is taken from the request; omitted optional fields are
    dropped from the stored document. Only the admin or the booking's owner may
    replace it, and a non-admin cannot move it to another user.
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
    async def replace_booking(
        self,
        *,
        actor: UserEntity,
        booking_id: str,
        tour_id: str,
        user_id: str,
        number_of_tickets: int,
        is_played: bool = False,
        payment_method: Optional[str] = None,
    ) -> Booking:
        with self.tracer.start_as_current_span(
            'use_case.replace_booking', attributes={'booking.id': booking_id}
        ):
            existing = await self.booking_repo.get_by_id(booking_id=booking_id)
            if not existing:
                raise NotFoundError('Booking not found')

            if not actor.is_admin:
                if not existing.is_owned_by(actor.id) or user_id != actor.id:
                    raise ForbiddenError('Not authorized to modify this booking')

            await load_tour(self.tour_repo, tour_id)
            await load_user(self.user_repo, user_id)

            replacement = existing.replaced_with(
                tour_id=tour_id,
                user_id=user_id,
                number_of_tickets=number_of_tickets,
                is_played=is_played,
                payment_method=payment_method,
            )

            replaced = await self.booking_repo.replace(booking=replacement)
            if not replaced:
                metrics.record_booking_write(operation='replace', result='not_found')
                raise NotFoundError('Booking not found')

            metrics.record_booking_write(operation='replace', result='ok')
            return replaced
