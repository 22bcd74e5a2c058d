from typing import Optional

from fastapi import APIRouter, Depends, Query, status
from opentelemetry import trace

from src.platform.logging.loguru_io import Logger
from src.platform.pagination.paginator import PageRequest
from src.service.holidays.app.command.book_tour_use_case import BookTourUseCase
from src.service.holidays.app.command.create_checkout_session_use_case import (
    CreateCheckoutSessionUseCase,
)
from src.service.holidays.app.command.delete_booking_use_case import DeleteBookingUseCase
from src.service.holidays.app.command.patch_booking_use_case import PatchBookingUseCase
from src.service.holidays.app.command.replace_booking_use_case import ReplaceBookingUseCase
from src.service.holidays.app.query.get_booking_use_case import GetBookingUseCase
from src.service.holidays.app.query.list_bookings_use_case import ListBookingsUseCase
from src.service.holidays.domain.entity.user_entity import UserEntity
from src.service.holidays.driving_adapter.http_controller.auth.role_auth import (
    require_admin,
    require_authenticated,
)
from src.service.holidays.driving_adapter.http_controller.schema.booking_schema import (
    BookingCreateRequest,
    BookingEnvelope,
    BookingPatchRequest,
    BookingReplaceRequest,
    BookingResponse,
    CheckoutSessionEnvelope,
    CheckoutSessionResponse,
)
from src.service.holidays.driving_adapter.http_controller.schema.common_schema import (
    PaginatedResponse,
)


router = APIRouter()
tracer = trace.get_tracer(__name__)


@router.post(
    '',
    status_code=status.HTTP_201_CREATED,
    response_model=BookingEnvelope,
    response_model_exclude_none=True,
)
@Logger.io
async def book_tour(
    request: BookingCreateRequest,
    current_user: UserEntity = Depends(require_authenticated),
    use_case: BookTourUseCase = Depends(BookTourUseCase.depends),
) -> BookingEnvelope:
    with tracer.start_as_current_span('controller.book_tour') as span:
        span.set_attribute('tour.id', request.tour_id)
        span.set_attribute('user.id', current_user.id or '')

        booking = await use_case.book_tour(
            actor=current_user,
            tour_id=request.tour_id,
            user_id=request.user_id,
            number_of_tickets=request.number_of_tickets,
            payment_method=request.payment_method,
        )

        if booking.id is None:
            raise ValueError('Booking ID should not be None after creation.')

        return BookingEnvelope(
            message='Tour booked successfully',
            booking=BookingResponse.from_entity(booking),
        )


@router.get(
    '',
    response_model=PaginatedResponse[BookingResponse],
    response_model_exclude_none=True,
)
@Logger.io
async def list_bookings(
    page: Optional[str] = Query(default=None),
    page_size: Optional[str] = Query(default=None, alias='pageSize'),
    current_user: UserEntity = Depends(require_admin),
    use_case: ListBookingsUseCase = Depends(ListBookingsUseCase.depends),
) -> PaginatedResponse[BookingResponse]:
    result = await use_case.list_bookings(PageRequest.from_query(page, page_size))
    return PaginatedResponse[BookingResponse].from_page(
        result, [BookingResponse.from_entity(b) for b in result.items]
    )


@router.get(
    '/{booking_id}', response_model=BookingEnvelope, response_model_exclude_none=True
)
@Logger.io
async def get_booking(
    booking_id: str,
    current_user: UserEntity = Depends(require_admin),
    use_case: GetBookingUseCase = Depends(GetBookingUseCase.depends),
) -> BookingEnvelope:
    booking = await use_case.get_booking(booking_id)
    return BookingEnvelope(
        message='Booking retrieved successfully', booking=BookingResponse.from_entity(booking)
    )


@router.put(
    '/{booking_id}', response_model=BookingEnvelope, response_model_exclude_none=True
)
@Logger.io
async def replace_booking(
    booking_id: str,
    request: BookingReplaceRequest,
    current_user: UserEntity = Depends(require_authenticated),
    use_case: ReplaceBookingUseCase = Depends(ReplaceBookingUseCase.depends),
) -> BookingEnvelope:
    booking = await use_case.replace_booking(
        actor=current_user,
        booking_id=booking_id,
        tour_id=request.tour_id,
        user_id=request.user_id,
        number_of_tickets=request.number_of_tickets,
        is_played=request.is_played,
        payment_method=request.payment_method,
    )
    return BookingEnvelope(
        message='Booking updated successfully', booking=BookingResponse.from_entity(booking)
    )


@router.patch(
    '/{booking_id}', response_model=BookingEnvelope, response_model_exclude_none=True
)
@Logger.io
async def patch_booking(
    booking_id: str,
    request: BookingPatchRequest,
    current_user: UserEntity = Depends(require_admin),
    use_case: PatchBookingUseCase = Depends(PatchBookingUseCase.depends),
) -> BookingEnvelope:
    booking = await use_case.patch_booking(booking_id=booking_id, fields=request.to_fields())
    return BookingEnvelope(
        message='Booking modified successfully', booking=BookingResponse.from_entity(booking)
    )


@router.delete(
    '/{booking_id}', response_model=BookingEnvelope, response_model_exclude_none=True
)
@Logger.io
async def delete_booking(
    booking_id: str,
    current_user: UserEntity = Depends(require_authenticated),
    use_case: DeleteBookingUseCase = Depends(DeleteBookingUseCase.depends),
) -> BookingEnvelope:
    booking = await use_case.delete_booking(actor=current_user, booking_id=booking_id)
    return BookingEnvelope(
        message='Booking deleted successfully', booking=BookingResponse.from_entity(booking)
    )


@router.get('/{booking_id}/checkout', response_model=CheckoutSessionEnvelope)
@Logger.io
async def get_checkout_session(
    booking_id: str,
    current_user: UserEntity = Depends(require_admin),
    use_case: CreateCheckoutSessionUseCase = Depends(CreateCheckoutSessionUseCase.depends),
) -> CheckoutSessionEnvelope:
    session = await use_case.create_checkout_session(booking_id=booking_id)
    return CheckoutSessionEnvelope(
        message='Checkout session created successfully',
        session=CheckoutSessionResponse(
            session_id=session.session_id,
            url=session.url,
            amount_total=session.amount_total,
            currency=session.currency,
        ),
    )
