from contextlib import AbstractAsyncContextManager
from typing import Any, Callable, List, Optional

from sqlalchemy import delete, func, select
from sqlalchemy.ext.asyncio import AsyncSession
import uuid_utils

from src.platform.logging.loguru_io import Logger
from src.service.holidays.app.interface.i_document_store import Document, IDocumentStore
from src.service.holidays.driven_adapter.model.document_model import DocumentModel
from src.service.holidays.driven_adapter.repo.document_codec import merge_fields


class SqlDocumentStore(IDocumentStore):
    """
    Document store on a single SQLAlchemy table.

    Each write runs in its own transaction; row-level atomicity of the database
    gives last-writer-wins per document.
    """

    def __init__(self, session_factory: Callable[..., AbstractAsyncContextManager[AsyncSession]]):
        self.session_factory = session_factory

    @staticmethod
    def _to_document(row: DocumentModel) -> Document:
        return {**row.body, 'id': row.document_id}

    @staticmethod
    def _strip_id(document: Document) -> Document:
        return {k: v for k, v in document.items() if k != 'id'}

    @staticmethod
    def _by_id(collection: str, document_id: str) -> Any:
        return select(DocumentModel).where(
            DocumentModel.collection == collection,
            DocumentModel.document_id == document_id,
        )

    @Logger.io
    async def find_by_id(self, *, collection: str, document_id: str) -> Optional[Document]:
        async with self.session_factory() as session:
            row = (await session.execute(self._by_id(collection, document_id))).scalar_one_or_none()
            return None if row is None else self._to_document(row)

    @Logger.io
    async def find_all(
        self, *, collection: str, skip: int = 0, limit: Optional[int] = None
    ) -> List[Document]:
        stmt = (
            select(DocumentModel)
            .where(DocumentModel.collection == collection)
            .order_by(DocumentModel.seq)
            .offset(skip)
        )
        if limit is not None:
            stmt = stmt.limit(limit)
        async with self.session_factory() as session:
            rows = (await session.execute(stmt)).scalars().all()
            return [self._to_document(row) for row in rows]

    @Logger.io
    async def count(self, *, collection: str) -> int:
        stmt = select(func.count()).select_from(DocumentModel).where(
            DocumentModel.collection == collection
        )
        async with self.session_factory() as session:
            return int((await session.execute(stmt)).scalar_one())

    @Logger.io
    async def find_by(self, *, collection: str, field: str, value: Any) -> List[Document]:
        stmt = (
            select(DocumentModel)
            .where(DocumentModel.collection == collection)
            .order_by(DocumentModel.seq)
        )
        if isinstance(value, str):
            stmt = stmt.where(DocumentModel.body[field].as_string() == value)
        async with self.session_factory() as session:
            rows = (await session.execute(stmt)).scalars().all()
            documents = [self._to_document(row) for row in rows]
        return [document for document in documents if document.get(field) == value]

    @Logger.io
    async def insert(self, *, collection: str, document: Document) -> Document:
        row = DocumentModel(
            collection=collection,
            document_id=str(uuid_utils.uuid7()),
            body=self._strip_id(document),
        )
        async with self.session_factory() as session:
            session.add(row)
            await session.commit()
            return self._to_document(row)

    @Logger.io
    async def replace(
        self, *, collection: str, document_id: str, document: Document
    ) -> Optional[Document]:
        async with self.session_factory() as session:
            row = (await session.execute(self._by_id(collection, document_id))).scalar_one_or_none()
            if row is None:
                return None
            row.body = self._strip_id(document)
            await session.commit()
            return self._to_document(row)

    @Logger.io
    async def patch(
        self, *, collection: str, document_id: str, fields: Document
    ) -> Optional[Document]:
        async with self.session_factory() as session:
            row = (await session.execute(self._by_id(collection, document_id))).scalar_one_or_none()
            if row is None:
                return None
            # Reassign so SQLAlchemy sees the JSON column change
            row.body = merge_fields(row.body, fields)
            await session.commit()
            return self._to_document(row)

    @Logger.io
    async def delete(self, *, collection: str, document_id: str) -> Optional[Document]:
        async with self.session_factory() as session:
            row = (await session.execute(self._by_id(collection, document_id))).scalar_one_or_none()
            if row is None:
                return None
            document = self._to_document(row)
            await session.execute(
                delete(DocumentModel).where(DocumentModel.seq == row.seq)
            )
            await session.commit()
            return document
