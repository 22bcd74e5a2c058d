from typing import Any, List, Mapping, Optional

from src.platform.logging.loguru_io import Logger
from src.service.holidays.app.interface.i_booking_repo import IBookingRepo
from src.service.holidays.app.interface.i_document_store import Document, IDocumentStore
from src.service.holidays.domain.entity.booking_entity import Booking, BookingStatus
from src.service.holidays.driven_adapter.repo.document_codec import (
    drop_none,
    dump_datetime,
    load_datetime,
)


BOOKING_COLLECTION = 'bookings'


class BookingRepoImpl(IBookingRepo):
    def __init__(self, *, document_store: IDocumentStore) -> None:
        self.document_store = document_store

    @staticmethod
    def _to_entity(document: Document) -> Booking:
        return Booking(
            id=document['id'],
            tour_id=document['tour_id'],
            user_id=document['user_id'],
            number_of_tickets=int(document['number_of_tickets']),
            is_played=bool(document.get('is_played', False)),
            payment_method=document.get('payment_method'),
            status=BookingStatus(document.get('status', BookingStatus.REQUESTED)),
            created_at=load_datetime(document.get('created_at')),
            updated_at=load_datetime(document.get('updated_at')),
        )

    @staticmethod
    def _to_document(booking: Booking) -> Document:
        return drop_none(
            {
                'tour_id': booking.tour_id,
                'user_id': booking.user_id,
                'number_of_tickets': booking.number_of_tickets,
                'is_played': booking.is_played,
                'payment_method': booking.payment_method,
                'status': booking.status.value,
                'created_at': dump_datetime(booking.created_at),
                'updated_at': dump_datetime(booking.updated_at),
            }
        )

    @staticmethod
    def _encode_fields(fields: Mapping[str, Any]) -> Document:
        encoded: Document = {}
        for key, value in fields.items():
            if key in ('created_at', 'updated_at'):
                value = dump_datetime(value)
            elif isinstance(value, BookingStatus):
                value = value.value
            encoded[key] = value
        return encoded

    @Logger.io
    async def get_by_id(self, *, booking_id: str) -> Optional[Booking]:
        document = await self.document_store.find_by_id(
            collection=BOOKING_COLLECTION, document_id=booking_id
        )
        return None if document is None else self._to_entity(document)

    @Logger.io
    async def list_page(self, *, skip: int, limit: int) -> List[Booking]:
        documents = await self.document_store.find_all(
            collection=BOOKING_COLLECTION, skip=skip, limit=limit
        )
        return [self._to_entity(document) for document in documents]

    async def count(self) -> int:
        return await self.document_store.count(collection=BOOKING_COLLECTION)

    @Logger.io
    async def list_by_tour(self, *, tour_id: str) -> List[Booking]:
        documents = await self.document_store.find_by(
            collection=BOOKING_COLLECTION, field='tour_id', value=tour_id
        )
        return [self._to_entity(document) for document in documents]

    @Logger.io
    async def create(self, *, booking: Booking) -> Booking:
        document = await self.document_store.insert(
            collection=BOOKING_COLLECTION, document=self._to_document(booking)
        )
        return self._to_entity(document)

    @Logger.io
    async def replace(self, *, booking: Booking) -> Optional[Booking]:
        if booking.id is None:
            raise ValueError('Cannot replace a booking without an id')
        document = await self.document_store.replace(
            collection=BOOKING_COLLECTION,
            document_id=booking.id,
            document=self._to_document(booking),
        )
        return None if document is None else self._to_entity(document)

    @Logger.io
    async def patch(self, *, booking_id: str, fields: Mapping[str, Any]) -> Optional[Booking]:
        document = await self.document_store.patch(
            collection=BOOKING_COLLECTION,
            document_id=booking_id,
            fields=self._encode_fields(fields),
        )
        return None if document is None else self._to_entity(document)

    @Logger.io
    async def delete(self, *, booking_id: str) -> Optional[Booking]:
        document = await self.document_store.delete(
            collection=BOOKING_COLLECTION, document_id=booking_id
        )
        return None if document is None else self._to_entity(document)
