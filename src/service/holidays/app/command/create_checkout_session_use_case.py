from typing import Self
import time

from dependency_injector.wiring import Provide, inject
from fastapi import Depends
from opentelemetry import trace

from src.platform.config.core_setting import Settings
from src.platform.config.di import Container
from src.platform.exception.exceptions import NotFoundError, PaymentGatewayError
from src.platform.logging.loguru_io import Logger
from src.platform.metrics.holidays_metrics import metrics
from src.service.holidays.app.command.reference_loader import load_tour, load_user
from src.service.holidays.app.dto.checkout_session import CheckoutRequest, CheckoutSession
from src.service.holidays.app.interface.i_booking_repo import IBookingRepo
from src.service.holidays.app.interface.i_checkout_gateway import ICheckoutGateway
from src.service.holidays.app.interface.i_tour_repo import ITourRepo
from src.service.holidays.app.interface.i_user_repo import IUserRepo


class CreateCheckoutSessionUseCase:
    """
    Hand a booking to the payment provider.

    One line item: the tour title at the tour price (minor units) times the
    booked tickets. The booking itself is not changed here.
    """

    def __init__(
        self,
        *,
        booking_repo: IBookingRepo,
        tour_repo: ITourRepo,
        user_repo: IUserRepo,
        checkout_gateway: ICheckoutGateway,
        currency: str = 'usd',
        success_url: str = '',
        cancel_url: str = '',
    ) -> None:
        self.booking_repo = booking_repo
        self.tour_repo = tour_repo
        self.user_repo = user_repo
        self.checkout_gateway = checkout_gateway
        self.currency = currency
        self.success_url = success_url
        self.cancel_url = cancel_url
        self.tracer = trace.get_tracer(__name__)

    @classmethod
    @inject
    def depends(
        cls,
        booking_repo: IBookingRepo = Depends(Provide[Container.booking_repo]),
        tour_repo: ITourRepo = Depends(Provide[Container.tour_repo]),
        user_repo: IUserRepo = Depends(Provide[Container.user_repo]),
        checkout_gateway: ICheckoutGateway = Depends(Provide[Container.checkout_gateway]),
        settings: Settings = Depends(Provide[Container.config_service]),
    ) -> Self:
        return cls(
            booking_repo=booking_repo,
            tour_repo=tour_repo,
            user_repo=user_repo,
            checkout_gateway=checkout_gateway,
            currency=settings.PAYMENT_CURRENCY,
            success_url=settings.PAYMENT_SUCCESS_URL,
            cancel_url=settings.PAYMENT_CANCEL_URL,
        )

    @Logger.io
    async def create_checkout_session(self, *, booking_id: str) -> CheckoutSession:
        with self.tracer.start_as_current_span(
            'use_case.create_checkout_session', attributes={'booking.id': booking_id}
        ):
            booking = await self.booking_repo.get_by_id(booking_id=booking_id)
            if not booking:
                raise NotFoundError('Booking not found')

            tour = await load_tour(self.tour_repo, booking.tour_id)
            user = await load_user(self.user_repo, booking.user_id)

            request = CheckoutRequest(
                booking_id=booking_id,
                product_name=tour.title,
                unit_amount=tour.unit_amount,
                quantity=booking.number_of_tickets,
                currency=self.currency,
                customer_email=user.email,
                success_url=self.success_url,
                cancel_url=self.cancel_url,
            )

            started = time.perf_counter()
            try:
                session = await self.checkout_gateway.create_session(request=request)
            except PaymentGatewayError:
                metrics.record_checkout_session(result='failed')
                raise
            finally:
                metrics.checkout_duration.observe(time.perf_counter() - started)

            metrics.record_checkout_session(result='created')
            return session
