"""Shared fixtures for the unit test suite.

Besides the environment guard and sample redirects, this module holds
in-test fakes of the redis-py and pymongo clients. The fakes implement only
the calls the Redirect DAOs make, with the same atomicity the real data
stores give: SET NX and a unique index on shortcode. `any_dao` runs a test
once per Redirect DAO variant.
"""

import copy
import threading
from datetime import datetime, UTC

import pytest
from pymongo.errors import DuplicateKeyError
from pytest import MonkeyPatch

from shorter.constants import ENV
from shorter.dao.memory import RedirectMemoryDAO
from shorter.dao.mongo import RedirectMongoDAO
from shorter.dao.redis import RedirectRedisDAO
from shorter.models import RedirectModel


class FakeRedis:
    def __init__(self):
        self.store: dict[str, str] = {}
        self.expiries: dict[str, int] = {}
        self.connection_pool = type('Pool', (), {'connection_kwargs': {'host': 'redis.test', 'port': 6379, 'db': 0}})()
        self._lock = threading.Lock()

    def ping(self):
        return True

    def set(self, key, value, nx=False, exat=None):
        with self._lock:
            if nx and key in self.store:
                return None
            self.store[key] = value
            if exat is not None:
                self.expiries[key] = exat
            return True

    def get(self, key):
        return self.store.get(key)


class FakeMongoCollection:
    full_name = 'shorter.redirect'

    def __init__(self):
        self.documents: dict[str, dict] = {}
        self.indexes: list[dict] = []
        self._lock = threading.Lock()

    def create_index(self, keys, **kwargs):
        self.indexes.append({'keys': keys, **kwargs})
        return kwargs.get('name')

    def insert_one(self, document):
        with self._lock:
            if document['shortcode'] in self.documents:
                raise DuplicateKeyError('E11000 duplicate key error collection: shorter.redirect index: shortcode_unique')
            self.documents[document['shortcode']] = {'_id': len(self.documents) + 1, **copy.deepcopy(document)}

    def find_one(self, query, projection=None):
        document = self.documents.get(query['shortcode'])
        if document is None:
            return None
        document = copy.deepcopy(document)
        if projection and projection.get('_id') is False:
            document.pop('_id')
        return document


class FakeMongoClient:
    def __init__(self, collection: FakeMongoCollection):
        self.collection = collection
        self.admin = type('Admin', (), {'command': staticmethod(lambda name: {'ok': 1.0})})()

    def __getitem__(self, database):
        return {'redirect': self.collection}


@pytest.fixture(autouse=True)
def _env(monkeypatch: MonkeyPatch) -> None:
    """Keep tests independent from the developer's shell environment."""
    for name in (*ENV.App, *ENV.Storage, *ENV.Shortener):
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def target_url() -> str:
    return 'https://example.com/blog/chuck-norris-is-awesome'


@pytest.fixture
def redirect(target_url) -> RedirectModel:
    return RedirectModel(
        shortcode='abc123',
        target=target_url,
        created_at=datetime(2026, 10, 18, 12, 0, 0, tzinfo=UTC),
    )


@pytest.fixture
def fake_redis() -> FakeRedis:
    return FakeRedis()


@pytest.fixture
def fake_collection() -> FakeMongoCollection:
    return FakeMongoCollection()


@pytest.fixture(params=['memory', 'redis', 'mongo'])
def any_dao(request, fake_redis, fake_collection):
    """Every Redirect DAO variant, backed by fakes of its client library."""
    match request.param:
        case 'memory':
            return RedirectMemoryDAO()
        case 'redis':
            return RedirectRedisDAO(redis_client=fake_redis, prefix='testapp:test')
        case 'mongo':
            return RedirectMongoDAO(mongo_client=FakeMongoClient(fake_collection))
