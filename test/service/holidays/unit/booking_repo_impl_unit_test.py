import pytest

from src.service.holidays.domain.entity.booking_entity import Booking, BookingStatus
from src.service.holidays.driven_adapter.repo.booking_repo_impl import (
    BOOKING_COLLECTION,
    BookingRepoImpl,
)
from src.service.holidays.driven_adapter.repo.in_memory_document_store import (
    InMemoryDocumentStore,
)


pytestmark = pytest.mark.unit


class TestBookingRepoImpl:
    def setup_method(self):
        self.store = InMemoryDocumentStore()
        self.repo = BookingRepoImpl(document_store=self.store)

    async def test_create_round_trips_entity(self):
        booking = Booking.create(
            tour_id='tour-1', user_id='user-1', number_of_tickets=3, payment_method='card'
        )

        created = await self.repo.create(booking=booking)
        fetched = await self.repo.get_by_id(booking_id=created.id)

        assert fetched == created
        assert fetched.status == BookingStatus.CONFIRMED
        assert fetched.created_at == booking.created_at

    async def test_stored_document_is_json_friendly(self):
        created = await self.repo.create(
            booking=Booking.create(tour_id='t', user_id='u', number_of_tickets=1)
        )

        raw = await self.store.find_by_id(collection=BOOKING_COLLECTION, document_id=created.id)

        assert isinstance(raw['created_at'], str)
        assert raw['status'] == 'requested'
        assert 'payment_method' not in raw

    async def test_replace_without_payment_method_removes_the_key(self):
        created = await self.repo.create(
            booking=Booking.create(
                tour_id='t', user_id='u', number_of_tickets=1, payment_method='card'
            )
        )

        await self.repo.replace(
            booking=created.replaced_with(tour_id='t', user_id='u', number_of_tickets=2)
        )
        raw = await self.store.find_by_id(collection=BOOKING_COLLECTION, document_id=created.id)

        assert 'payment_method' not in raw
        assert raw['number_of_tickets'] == 2

    async def test_patch_encodes_status_and_timestamps(self):
        created = await self.repo.create(
            booking=Booking.create(tour_id='t', user_id='u', number_of_tickets=1)
        )
        patched = created.patched_with({'is_played': True})

        result = await self.repo.patch(
            booking_id=created.id,
            fields={'is_played': True, 'status': patched.status, 'updated_at': patched.updated_at},
        )

        assert result.status == BookingStatus.PLAYED
        assert result.updated_at == patched.updated_at
        assert result.payment_method is None

    async def test_list_by_tour(self):
        for tour_id in ('a', 'b', 'a'):
            await self.repo.create(
                booking=Booking.create(tour_id=tour_id, user_id='u', number_of_tickets=1)
            )

        bookings = await self.repo.list_by_tour(tour_id='a')

        assert len(bookings) == 2
        assert all(b.tour_id == 'a' for b in bookings)

    async def test_patch_clearing_payment_method_removes_the_key(self):
        created = await self.repo.create(
            booking=Booking.create(
                tour_id='t', user_id='u', number_of_tickets=1, payment_method='card'
            )
        )
        patched = created.patched_with({'payment_method': None})

        result = await self.repo.patch(
            booking_id=created.id,
            fields={'payment_method': None, 'status': patched.status},
        )
        raw = await self.store.find_by_id(collection=BOOKING_COLLECTION, document_id=created.id)

        assert 'payment_method' not in raw
        assert raw['status'] == 'requested'
        assert result.payment_method is None
