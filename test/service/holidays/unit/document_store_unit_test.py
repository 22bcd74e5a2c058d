"""
Document store contract, run against the in-memory store and the SQL store (SQLite)
"""

import pytest

from src.platform.database.orm_db_setting import Database
from src.platform.pagination.paginator import PageRequest
from src.service.holidays.driven_adapter.repo.in_memory_document_store import (
    InMemoryDocumentStore,
)
from src.service.holidays.driven_adapter.repo.sql_document_store import SqlDocumentStore


pytestmark = pytest.mark.unit

COLLECTION = 'bookings'


@pytest.fixture(params=['memory', 'sql'])
async def store(request, tmp_path):
    if request.param == 'memory':
        yield InMemoryDocumentStore()
        return

    database = Database(database_url=f'sqlite+aiosqlite:///{tmp_path / "store.db"}')
    await database.create_tables()
    yield SqlDocumentStore(session_factory=database.session)
    await database.dispose()


async def _insert_many(store, count: int) -> list[str]:
    ids = []
    for i in range(count):
        document = await store.insert(collection=COLLECTION, document={'n': i, 'tag': 'x'})
        ids.append(document['id'])
    return ids


class TestDocumentStore:
    async def test_insert_assigns_id(self, store):
        document = await store.insert(collection=COLLECTION, document={'tour_id': 't1'})

        assert document['id']
        found = await store.find_by_id(collection=COLLECTION, document_id=document['id'])
        assert found == {'tour_id': 't1', 'id': document['id']}

    async def test_insert_ignores_client_id(self, store):
        document = await store.insert(collection=COLLECTION, document={'id': 'mine', 'a': 1})

        assert document['id'] != 'mine'

    async def test_find_all_keeps_insertion_order_and_slices(self, store):
        ids = await _insert_many(store, 5)

        window = await store.find_all(collection=COLLECTION, skip=1, limit=2)

        assert [d['id'] for d in window] == ids[1:3]
        assert await store.count(collection=COLLECTION) == 5

    async def test_find_all_past_the_end_is_empty(self, store):
        await _insert_many(store, 1)

        assert await store.find_all(collection=COLLECTION, skip=1, limit=1) == []

    async def test_replace_drops_omitted_fields_and_keeps_position(self, store):
        ids = await _insert_many(store, 3)
        await store.patch(collection=COLLECTION, document_id=ids[1], fields={'extra': 'y'})

        replaced = await store.replace(
            collection=COLLECTION, document_id=ids[1], document={'n': 100}
        )

        assert replaced == {'n': 100, 'id': ids[1]}
        listed = await store.find_all(collection=COLLECTION)
        assert [d['id'] for d in listed] == ids
        assert listed[1] == {'n': 100, 'id': ids[1]}

    async def test_patch_changes_only_given_fields(self, store):
        ids = await _insert_many(store, 1)

        patched = await store.patch(
            collection=COLLECTION, document_id=ids[0], fields={'is_played': True}
        )

        assert patched == {'n': 0, 'tag': 'x', 'is_played': True, 'id': ids[0]}

    async def test_unknown_id(self, store):
        await _insert_many(store, 1)

        assert await store.find_by_id(collection=COLLECTION, document_id='nope') is None
        assert await store.replace(collection=COLLECTION, document_id='nope', document={}) is None
        assert await store.patch(collection=COLLECTION, document_id='nope', fields={}) is None
        assert await store.delete(collection=COLLECTION, document_id='nope') is None
        assert await store.count(collection=COLLECTION) == 1

    async def test_delete_returns_removed_document(self, store):
        ids = await _insert_many(store, 2)

        deleted = await store.delete(collection=COLLECTION, document_id=ids[0])

        assert deleted == {'n': 0, 'tag': 'x', 'id': ids[0]}
        assert await store.find_by_id(collection=COLLECTION, document_id=ids[0]) is None
        assert await store.count(collection=COLLECTION) == 1

    async def test_find_by_field(self, store):
        await store.insert(collection=COLLECTION, document={'tour_id': 'a', 'n': 1})
        await store.insert(collection=COLLECTION, document={'tour_id': 'b', 'n': 2})
        await store.insert(collection=COLLECTION, document={'tour_id': 'a', 'n': 3})

        found = await store.find_by(collection=COLLECTION, field='tour_id', value='a')

        assert [d['n'] for d in found] == [1, 3]

    async def test_collections_are_isolated(self, store):
        await store.insert(collection='tours', document={'title': 'Bali'})

        assert await store.count(collection=COLLECTION) == 0
        assert await store.find_all(collection=COLLECTION) == []

    async def test_returned_documents_are_copies(self, store):
        document = await store.insert(collection=COLLECTION, document={'gallery': ['a.jpg']})
        document['gallery'].append('b.jpg')

        found = await store.find_by_id(collection=COLLECTION, document_id=document['id'])

        assert found['gallery'] == ['a.jpg']

    async def test_patch_with_none_removes_the_field(self, store):
        document = await store.insert(
            collection=COLLECTION, document={'n': 1, 'payment_method': 'card'}
        )

        patched = await store.patch(
            collection=COLLECTION, document_id=document['id'], fields={'payment_method': None}
        )

        assert patched == {'n': 1, 'id': document['id']}
        found = await store.find_by_id(collection=COLLECTION, document_id=document['id'])
        assert 'payment_method' not in found

    async def test_page_far_past_the_end_is_empty(self, store):
        await _insert_many(store, 3)
        request = PageRequest.from_query(
            '99999999999999999999', '10', default_page_size=10, max_page_size=100
        )

        window = await store.find_all(
            collection=COLLECTION, skip=request.skip, limit=request.limit
        )

        assert window == []


STORE_OPERATIONS = (
    'find_by_id',
    'find_all',
    'count',
    'find_by',
    'insert',
    'replace',
    'patch',
    'delete',
)


@pytest.mark.parametrize('store_class', [InMemoryDocumentStore, SqlDocumentStore])
@pytest.mark.parametrize('operation', STORE_OPERATIONS)
def test_every_store_operation_is_io_logged(store_class, operation):
    # Logger.io wraps with functools.wraps, which records the original function
    assert hasattr(getattr(store_class, operation), '__wrapped__')
