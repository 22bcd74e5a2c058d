"""
User Repository Implementation on the document store
"""

from typing import Optional

from src.platform.logging.loguru_io import Logger
from src.service.holidays.app.interface.i_document_store import Document, IDocumentStore
from src.service.holidays.app.interface.i_user_repo import IUserRepo
from src.service.holidays.domain.entity.user_entity import UserEntity, UserRole
from src.service.holidays.driven_adapter.repo.document_codec import (
    drop_none,
    dump_datetime,
    load_datetime,
)


USER_COLLECTION = 'users'


class UserRepoImpl(IUserRepo):
    def __init__(self, *, document_store: IDocumentStore) -> None:
        self.document_store = document_store

    @staticmethod
    def _to_entity(document: Document) -> UserEntity:
        return UserEntity(
            id=document['id'],
            email=document['email'],
            name=document.get('name', ''),
            hashed_password=document.get('hashed_password', ''),
            role=UserRole(document.get('role', UserRole.STANDARD.value)),
            is_active=bool(document.get('is_active', True)),
            created_at=load_datetime(document.get('created_at')),
        )

    @staticmethod
    def _to_document(user: UserEntity) -> Document:
        return drop_none(
            {
                'email': user.email,
                'name': user.name,
                'hashed_password': user.hashed_password,
                'role': user.role.value,
                'is_active': user.is_active,
                'created_at': dump_datetime(user.created_at),
            }
        )

    @Logger.io
    async def get_by_id(self, *, user_id: str) -> Optional[UserEntity]:
        document = await self.document_store.find_by_id(
            collection=USER_COLLECTION, document_id=user_id
        )
        return None if document is None else self._to_entity(document)

    @Logger.io
    async def get_by_email(self, *, email: str) -> Optional[UserEntity]:
        documents = await self.document_store.find_by(
            collection=USER_COLLECTION, field='email', value=email.lower()
        )
        return self._to_entity(documents[0]) if documents else None

    @Logger.io
    async def create(self, *, user: UserEntity) -> UserEntity:
        document = self._to_document(user)
        document['email'] = user.email.lower()
        created = await self.document_store.insert(collection=USER_COLLECTION, document=document)
        return self._to_entity(created)

    @Logger.io
    async def update_password(self, *, user_id: str, hashed_password: str) -> Optional[UserEntity]:
        document = await self.document_store.patch(
            collection=USER_COLLECTION,
            document_id=user_id,
            fields={'hashed_password': hashed_password},
        )
        return None if document is None else self._to_entity(document)
