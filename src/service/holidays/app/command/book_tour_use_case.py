from typing import Optional, Self

from dependency_injector.wiring import Provide, inject
from fastapi import Depends
from opentelemetry import trace

from src.platform.config.core_setting import Settings
from src.platform.config.di import Container
from src.platform.exception.exceptions import DomainError, ForbiddenError
from src.platform.logging.loguru_io import Logger
from src.platform.metrics.holidays_metrics import metrics
from src.service.holidays.app.command.reference_loader import load_tour, load_user
from src.service.holidays.app.interface.i_booking_notifier import INotificationDispatcher
from src.service.holidays.app.interface.i_booking_repo import IBookingRepo
from src.service.holidays.app.interface.i_tour_repo import ITourRepo
from src.service.holidays.app.interface.i_user_repo import IUserRepo
from src.service.holidays.domain.entity.booking_entity import Booking, BookingStatus
from src.service.holidays.domain.entity.tour_entity import Tour
from src.service.holidays.domain.entity.user_entity import UserEntity


class BookTourUseCase:
    """
    Book a tour for a user

    Flow:
    1. Resolve the booked user (defaults to the caller; only admins book for others)
    2. Validate tour and user exist (Fail Fast, nothing written)
    3. Optional seat capacity check
    4. Insert booking
    5. Dispatch the booking-received mail on the background task group

    The response never waits for the mail and never fails because of it.
    """

    def __init__(
        self,
        *,
        booking_repo: IBookingRepo,
        tour_repo: ITourRepo,
        user_repo: IUserRepo,
        notification_dispatcher: INotificationDispatcher,
        enforce_seat_capacity: bool = False,
    ) -> None:
        self.booking_repo = booking_repo
        self.tour_repo = tour_repo
        self.user_repo = user_repo
        self.notification_dispatcher = notification_dispatcher
        self.enforce_seat_capacity = enforce_seat_capacity
        self.tracer = trace.get_tracer(__name__)

    @classmethod
    @inject
    def depends(
        cls,
        booking_repo: IBookingRepo = Depends(Provide[Container.booking_repo]),
        tour_repo: ITourRepo = Depends(Provide[Container.tour_repo]),
        user_repo: IUserRepo = Depends(Provide[Container.user_repo]),
        notification_dispatcher: INotificationDispatcher = Depends(
            Provide[Container.notification_dispatcher]
        ),
        settings: Settings = Depends(Provide[Container.config_service]),
    ) -> Self:
        return cls(
            booking_repo=booking_repo,
            tour_repo=tour_repo,
            user_repo=user_repo,
            notification_dispatcher=notification_dispatcher,
            enforce_seat_capacity=settings.ENFORCE_SEAT_CAPACITY,
        )

    async def _ensure_capacity(self, *, tour: Tour, number_of_tickets: int) -> None:
        bookings = await self.booking_repo.list_by_tour(tour_id=tour.id or '')
        taken = sum(
            b.number_of_tickets for b in bookings if b.status != BookingStatus.CANCELLED
        )
        if taken + number_of_tickets > tour.seats:
            raise DomainError(f'Only {max(tour.seats - taken, 0)} seats left on this tour')

    @Logger.io
    async def book_tour(
        self,
        *,
        actor: UserEntity,
        tour_id: str,
        number_of_tickets: int,
        user_id: Optional[str] = None,
        payment_method: Optional[str] = None,
    ) -> Booking:
        booked_user_id = user_id or actor.id or ''

        with self.tracer.start_as_current_span(
            'use_case.book_tour',
            attributes={'tour.id': tour_id, 'user.id': booked_user_id},
        ):
            if not actor.is_admin and booked_user_id != actor.id:
                raise ForbiddenError('Not authorized to book for another user')

            tour = await load_tour(self.tour_repo, tour_id)
            user = await load_user(self.user_repo, booked_user_id)

            booking = Booking.create(
                tour_id=tour_id,
                user_id=booked_user_id,
                number_of_tickets=number_of_tickets,
                payment_method=payment_method,
            )

            if self.enforce_seat_capacity:
                await self._ensure_capacity(tour=tour, number_of_tickets=number_of_tickets)

            created = await self.booking_repo.create(booking=booking)
            metrics.record_booking_created(payment_method=created.payment_method)
            Logger.base.info(
                f'📝 [BOOK-TOUR] Booking {created.id} for tour {tour_id} by user {booked_user_id}'
            )

            self.notification_dispatcher.dispatch_booking_received(
                email=user.email, display_name=user.name
            )
            return created
