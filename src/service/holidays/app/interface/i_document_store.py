from abc import ABC, abstractmethod
from typing import Any, Dict, List, Optional


Document = Dict[str, Any]


class IDocumentStore(ABC):
    """
    Collection-oriented document store.

    Documents are plain dicts; the store owns the ``id`` key and insertion order.
    ``replace`` swaps the whole field set, ``patch`` overwrites only the given fields
    and removes the ones given as ``None``.
    Writes against an unknown id return ``None`` instead of raising.
    """

    @abstractmethod
    async def find_by_id(self, *, collection: str, document_id: str) -> Optional[Document]:
        pass

    @abstractmethod
    async def find_all(
        self, *, collection: str, skip: int = 0, limit: Optional[int] = None
    ) -> List[Document]:
        """Documents in insertion order."""
        pass

    @abstractmethod
    async def count(self, *, collection: str) -> int:
        pass

    @abstractmethod
    async def find_by(self, *, collection: str, field: str, value: Any) -> List[Document]:
        pass

    @abstractmethod
    async def insert(self, *, collection: str, document: Document) -> Document:
        pass

    @abstractmethod
    async def replace(
        self, *, collection: str, document_id: str, document: Document
    ) -> Optional[Document]:
        pass

    @abstractmethod
    async def patch(
        self, *, collection: str, document_id: str, fields: Document
    ) -> Optional[Document]:
        pass

    @abstractmethod
    async def delete(self, *, collection: str, document_id: str) -> Optional[Document]:
        pass
