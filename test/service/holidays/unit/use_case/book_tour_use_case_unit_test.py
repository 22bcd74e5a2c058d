"""
Unit tests for BookTourUseCase

Test Coverage:
1. Successful booking (defaults, notification dispatched once)
2. Reference checks (unknown tour/user writes nothing)
3. Authorization (booking for another user)
4. Seat capacity policy
"""

from unittest.mock import AsyncMock, MagicMock

import attrs
import pytest

from src.platform.exception.exceptions import DomainError, ForbiddenError, NotFoundError
from src.service.holidays.app.command.book_tour_use_case import BookTourUseCase
from src.service.holidays.domain.entity.booking_entity import Booking, BookingStatus
from src.service.holidays.domain.entity.tour_entity import Tour
from src.service.holidays.domain.entity.user_entity import UserEntity, UserRole


pytestmark = pytest.mark.unit


def _traveller(user_id: str = 'user-1') -> UserEntity:
    return UserEntity(id=user_id, email=f'{user_id}@holidays-planner.com', name='Jane Traveller')


def _admin() -> UserEntity:
    return UserEntity(
        id='admin-1', email='admin@holidays-planner.com', name='Admin', role=UserRole.ADMIN
    )


def _tour(seats: int = 10) -> Tour:
    tour = Tour.create(destination='Zanzibar', title='Spice Island', price=100, seats=seats)
    tour.id = 'tour-1'
    return tour


class TestBookTourUseCase:
    def setup_method(self):
        self.booking_repo = AsyncMock()
        self.booking_repo.create.side_effect = lambda booking: attrs.evolve(booking, id='b-1')
        self.tour_repo = AsyncMock()
        self.tour_repo.get_by_id.return_value = _tour()
        self.user_repo = AsyncMock()
        self.user_repo.get_by_id.side_effect = lambda user_id: _traveller(user_id)
        self.dispatcher = MagicMock()

        self.use_case = BookTourUseCase(
            booking_repo=self.booking_repo,
            tour_repo=self.tour_repo,
            user_repo=self.user_repo,
            notification_dispatcher=self.dispatcher,
        )

    async def test_books_for_the_caller_by_default(self):
        # When: a traveller books without naming a user
        booking = await self.use_case.book_tour(
            actor=_traveller(), tour_id='tour-1', number_of_tickets=2
        )

        # Then: the booking belongs to the caller and is stored once
        assert booking.id == 'b-1'
        assert booking.user_id == 'user-1'
        assert booking.status == BookingStatus.REQUESTED
        self.booking_repo.create.assert_awaited_once()

    async def test_notification_dispatched_exactly_once(self):
        await self.use_case.book_tour(actor=_traveller(), tour_id='tour-1', number_of_tickets=1)

        self.dispatcher.dispatch_booking_received.assert_called_once_with(
            email='user-1@holidays-planner.com', display_name='Jane Traveller'
        )

    async def test_payment_method_confirms_booking(self):
        booking = await self.use_case.book_tour(
            actor=_traveller(), tour_id='tour-1', number_of_tickets=1, payment_method='card'
        )

        assert booking.status == BookingStatus.CONFIRMED

    async def test_unknown_tour_writes_nothing(self):
        self.tour_repo.get_by_id.return_value = None

        with pytest.raises(NotFoundError, match='Tour not found'):
            await self.use_case.book_tour(
                actor=_traveller(), tour_id='missing', number_of_tickets=1
            )

        self.booking_repo.create.assert_not_awaited()
        self.dispatcher.dispatch_booking_received.assert_not_called()

    async def test_unknown_user_writes_nothing(self):
        self.user_repo.get_by_id.side_effect = None
        self.user_repo.get_by_id.return_value = None

        with pytest.raises(NotFoundError, match='User not found'):
            await self.use_case.book_tour(
                actor=_admin(), tour_id='tour-1', user_id='ghost', number_of_tickets=1
            )

        self.booking_repo.create.assert_not_awaited()

    async def test_traveller_cannot_book_for_someone_else(self):
        with pytest.raises(ForbiddenError):
            await self.use_case.book_tour(
                actor=_traveller(), tour_id='tour-1', user_id='user-2', number_of_tickets=1
            )

        self.tour_repo.get_by_id.assert_not_awaited()
        self.booking_repo.create.assert_not_awaited()

    async def test_admin_can_book_for_someone_else(self):
        booking = await self.use_case.book_tour(
            actor=_admin(), tour_id='tour-1', user_id='user-2', number_of_tickets=1
        )

        assert booking.user_id == 'user-2'
        self.dispatcher.dispatch_booking_received.assert_called_once_with(
            email='user-2@holidays-planner.com', display_name='Jane Traveller'
        )

    async def test_invalid_ticket_count_writes_nothing(self):
        with pytest.raises(DomainError):
            await self.use_case.book_tour(
                actor=_traveller(), tour_id='tour-1', number_of_tickets=0
            )

        self.booking_repo.create.assert_not_awaited()


class TestSeatCapacityPolicy:
    def setup_method(self):
        self.booking_repo = AsyncMock()
        self.booking_repo.create.side_effect = lambda booking: attrs.evolve(booking, id='b-new')
        self.tour_repo = AsyncMock()
        self.tour_repo.get_by_id.return_value = _tour(seats=5)
        self.user_repo = AsyncMock()
        self.user_repo.get_by_id.return_value = _traveller()

        self.use_case = BookTourUseCase(
            booking_repo=self.booking_repo,
            tour_repo=self.tour_repo,
            user_repo=self.user_repo,
            notification_dispatcher=MagicMock(),
            enforce_seat_capacity=True,
        )

    def _existing(self, tickets: int, status: BookingStatus) -> Booking:
        booking = Booking.create(tour_id='tour-1', user_id='user-9', number_of_tickets=tickets)
        return attrs.evolve(booking, status=status)

    async def test_rejects_overbooking(self):
        self.booking_repo.list_by_tour.return_value = [
            self._existing(4, BookingStatus.CONFIRMED)
        ]

        with pytest.raises(DomainError, match='Only 1 seats left'):
            await self.use_case.book_tour(
                actor=_traveller(), tour_id='tour-1', number_of_tickets=2
            )

        self.booking_repo.create.assert_not_awaited()

    async def test_cancelled_bookings_free_their_seats(self):
        self.booking_repo.list_by_tour.return_value = [
            self._existing(4, BookingStatus.CANCELLED)
        ]

        booking = await self.use_case.book_tour(
            actor=_traveller(), tour_id='tour-1', number_of_tickets=5
        )

        assert booking.id == 'b-new'
