from copy import deepcopy
from typing import Any, Dict, List, Optional

import uuid_utils

from src.platform.logging.loguru_io import Logger
from src.service.holidays.app.interface.i_document_store import Document, IDocumentStore
from src.service.holidays.driven_adapter.repo.document_codec import merge_fields


class InMemoryDocumentStore(IDocumentStore):
    """
    Process-local store backed by insertion-ordered dicts.

    Every operation completes without awaiting, so each one is atomic on the event
    loop; concurrent writers to one id resolve as last-writer-wins.
    """

    def __init__(self) -> None:
        self._collections: Dict[str, Dict[str, Document]] = {}

    def _collection(self, name: str) -> Dict[str, Document]:
        return self._collections.setdefault(name, {})

    @staticmethod
    def _export(document_id: str, body: Document) -> Document:
        return {**deepcopy(body), 'id': document_id}

    @Logger.io
    async def find_by_id(self, *, collection: str, document_id: str) -> Optional[Document]:
        body = self._collection(collection).get(document_id)
        return None if body is None else self._export(document_id, body)

    @Logger.io
    async def find_all(
        self, *, collection: str, skip: int = 0, limit: Optional[int] = None
    ) -> List[Document]:
        items = list(self._collection(collection).items())
        window = items[skip:] if limit is None else items[skip : skip + limit]
        return [self._export(document_id, body) for document_id, body in window]

    @Logger.io
    async def count(self, *, collection: str) -> int:
        return len(self._collection(collection))

    @Logger.io
    async def find_by(self, *, collection: str, field: str, value: Any) -> List[Document]:
        return [
            self._export(document_id, body)
            for document_id, body in self._collection(collection).items()
            if body.get(field) == value
        ]

    @Logger.io
    async def insert(self, *, collection: str, document: Document) -> Document:
        document_id = str(uuid_utils.uuid7())
        body = {k: deepcopy(v) for k, v in document.items() if k != 'id'}
        self._collection(collection)[document_id] = body
        return self._export(document_id, body)

    @Logger.io
    async def replace(
        self, *, collection: str, document_id: str, document: Document
    ) -> Optional[Document]:
        items = self._collection(collection)
        if document_id not in items:
            return None
        # Assigning an existing key keeps its insertion position
        items[document_id] = {k: deepcopy(v) for k, v in document.items() if k != 'id'}
        return self._export(document_id, items[document_id])

    @Logger.io
    async def patch(
        self, *, collection: str, document_id: str, fields: Document
    ) -> Optional[Document]:
        items = self._collection(collection)
        if document_id not in items:
            return None
        items[document_id] = merge_fields(items[document_id], deepcopy(fields))
        return self._export(document_id, items[document_id])

    @Logger.io
    async def delete(self, *, collection: str, document_id: str) -> Optional[Document]:
        body = self._collection(collection).pop(document_id, None)
        return None if body is None else self._export(document_id, body)
