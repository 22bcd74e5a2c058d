from typing import Any, List, Mapping, Optional

from src.platform.logging.loguru_io import Logger
from src.service.holidays.app.interface.i_document_store import Document, IDocumentStore
from src.service.holidays.app.interface.i_tour_repo import ITourRepo
from src.service.holidays.domain.entity.tour_entity import Tour
from src.service.holidays.driven_adapter.repo.document_codec import (
    drop_none,
    dump_datetime,
    load_datetime,
)


TOUR_COLLECTION = 'tours'

_TOUR_FIELDS = (
    'destination',
    'title',
    'price',
    'seats',
    'backdrop_image',
    'description',
    'duration',
    'group_size',
    'discount',
    'tour_type',
    'departure',
    'from_month',
    'to_month',
    'departure_time',
    'return_time',
    'gallery',
    'price_included',
    'price_not_included',
)


class TourRepoImpl(ITourRepo):
    def __init__(self, *, document_store: IDocumentStore) -> None:
        self.document_store = document_store

    @staticmethod
    def _to_entity(document: Document) -> Tour:
        fields = {name: document[name] for name in _TOUR_FIELDS if name in document}
        return Tour(
            **fields,
            id=document['id'],
            created_at=load_datetime(document.get('created_at')),
            updated_at=load_datetime(document.get('updated_at')),
        )

    @staticmethod
    def _to_document(tour: Tour) -> Document:
        document = {name: getattr(tour, name) for name in _TOUR_FIELDS}
        document['created_at'] = dump_datetime(tour.created_at)
        document['updated_at'] = dump_datetime(tour.updated_at)
        return drop_none(document)

    @Logger.io
    async def get_by_id(self, *, tour_id: str) -> Optional[Tour]:
        document = await self.document_store.find_by_id(
            collection=TOUR_COLLECTION, document_id=tour_id
        )
        return None if document is None else self._to_entity(document)

    @Logger.io
    async def list_page(self, *, skip: int, limit: int) -> List[Tour]:
        documents = await self.document_store.find_all(
            collection=TOUR_COLLECTION, skip=skip, limit=limit
        )
        return [self._to_entity(document) for document in documents]

    async def count(self) -> int:
        return await self.document_store.count(collection=TOUR_COLLECTION)

    @Logger.io
    async def create(self, *, tour: Tour) -> Tour:
        document = await self.document_store.insert(
            collection=TOUR_COLLECTION, document=self._to_document(tour)
        )
        return self._to_entity(document)

    @Logger.io
    async def replace(self, *, tour: Tour) -> Optional[Tour]:
        if tour.id is None:
            raise ValueError('Cannot replace a tour without an id')
        document = await self.document_store.replace(
            collection=TOUR_COLLECTION, document_id=tour.id, document=self._to_document(tour)
        )
        return None if document is None else self._to_entity(document)

    @Logger.io
    async def patch(self, *, tour_id: str, fields: Mapping[str, Any]) -> Optional[Tour]:
        encoded = {
            key: dump_datetime(value) if key in ('created_at', 'updated_at') else value
            for key, value in fields.items()
        }
        document = await self.document_store.patch(
            collection=TOUR_COLLECTION, document_id=tour_id, fields=encoded
        )
        return None if document is None else self._to_entity(document)

    @Logger.io
    async def delete(self, *, tour_id: str) -> Optional[Tour]:
        document = await self.document_store.delete(
            collection=TOUR_COLLECTION, document_id=tour_id
        )
        return None if document is None else self._to_entity(document)
