"""
Unit tests for the Booking entity and its status transitions
"""

import pytest

from src.platform.exception.exceptions import DomainError
from src.service.holidays.domain.entity.booking_entity import Booking, BookingStatus


pytestmark = pytest.mark.unit


def _booking(**overrides) -> Booking:
    fields = {'tour_id': 'tour-1', 'user_id': 'user-1', 'number_of_tickets': 2}
    fields.update(overrides)
    booking = Booking.create(**fields)
    booking.id = 'booking-1'
    return booking


class TestBookingCreate:
    def test_new_booking_is_requested(self):
        booking = _booking()

        assert booking.status == BookingStatus.REQUESTED
        assert booking.is_played is False
        assert booking.payment_method is None
        assert booking.created_at is not None
        assert booking.created_at == booking.updated_at

    def test_new_booking_with_payment_method_is_confirmed(self):
        booking = _booking(payment_method='card')

        assert booking.status == BookingStatus.CONFIRMED

    def test_empty_payment_method_is_dropped(self):
        booking = _booking(payment_method='')

        assert booking.payment_method is None
        assert booking.status == BookingStatus.REQUESTED

    @pytest.mark.parametrize('tickets', [0, -1])
    def test_ticket_count_must_be_positive(self, tickets):
        with pytest.raises(DomainError, match='at least 1'):
            _booking(number_of_tickets=tickets)

    def test_cannot_create_played_booking(self):
        with pytest.raises(DomainError):
            Booking.create(tour_id='t', user_id='u', number_of_tickets=1, is_played=True)


class TestBookingReplace:
    def test_replace_drops_omitted_payment_method(self):
        booking = _booking(payment_method='card')

        replaced = booking.replaced_with(tour_id='tour-2', user_id='user-1', number_of_tickets=4)

        assert replaced.id == booking.id
        assert replaced.created_at == booking.created_at
        assert replaced.tour_id == 'tour-2'
        assert replaced.number_of_tickets == 4
        assert replaced.payment_method is None
        assert replaced.status == BookingStatus.REQUESTED

    def test_replace_with_is_played_marks_played(self):
        booking = _booking()

        replaced = booking.replaced_with(
            tour_id='tour-1', user_id='user-1', number_of_tickets=2, is_played=True
        )

        assert replaced.status == BookingStatus.PLAYED

    def test_played_booking_cannot_go_back_to_requested(self):
        played = _booking().replaced_with(
            tour_id='tour-1', user_id='user-1', number_of_tickets=2, is_played=True
        )

        with pytest.raises(DomainError, match='cannot move'):
            played.replaced_with(tour_id='tour-1', user_id='user-1', number_of_tickets=2)


class TestBookingPatch:
    def test_patch_changes_only_given_fields(self):
        booking = _booking(payment_method='card')

        patched = booking.patched_with({'is_played': True})

        assert patched.is_played is True
        assert patched.payment_method == 'card'
        assert patched.number_of_tickets == 2
        assert patched.status == BookingStatus.PLAYED

    def test_patch_rejects_unknown_fields(self):
        with pytest.raises(DomainError, match='Unknown booking fields: status'):
            _booking().patched_with({'status': 'cancelled'})

    def test_patch_validates_ticket_count(self):
        with pytest.raises(DomainError):
            _booking().patched_with({'number_of_tickets': 0})

    def test_patch_adding_payment_method_confirms(self):
        patched = _booking().patched_with({'payment_method': 'paypal'})

        assert patched.status == BookingStatus.CONFIRMED


class TestBookingCancel:
    def test_cancel_is_terminal(self):
        cancelled = _booking().cancel()

        assert cancelled.status == BookingStatus.CANCELLED
        assert cancelled.is_terminal is True
        assert not cancelled.can_transition_to(BookingStatus.REQUESTED)

    def test_cancel_twice_fails(self):
        with pytest.raises(DomainError, match='already cancelled'):
            _booking().cancel().cancel()

    def test_played_booking_can_be_cancelled(self):
        played = _booking().patched_with({'is_played': True})

        assert played.cancel().status == BookingStatus.CANCELLED


class TestBookingOwnership:
    def test_owner(self):
        booking = _booking()

        assert booking.is_owned_by('user-1') is True
        assert booking.is_owned_by('user-2') is False
        assert booking.is_owned_by(None) is False
