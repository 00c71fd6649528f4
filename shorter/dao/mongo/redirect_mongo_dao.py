"""Data Access Object (DAO) implementation for managing redirects in MongoDB

One document per redirect:

    {
        "shortcode": "abc123",              (unique index)
        "target": "https://example.com",
        "created_at": ISODate(...),
        "expires_at": ISODate(...) | null   (TTL index, expireAfterSeconds=0)
    }

Example:
    >>> from shorter.dao.mongo import RedirectMongoDAO
    >>> dao = RedirectMongoDAO(mongo_uri="mongodb://localhost:27017")
    >>> dao.insert(RedirectModel(shortcode="abc123", target="https://example.com"))
    <RedirectMongoDAO>
    >>> dao.get("abc123").target
    'https://example.com'
"""

from datetime import datetime, UTC

import pymongo
from beartype import beartype
from pymongo.errors import DuplicateKeyError

from shorter.models import RedirectModel
from shorter.dao.base import RedirectBaseDAO
from shorter.dao.helpers import ensure_time_left
from shorter.dao.mongo.mixins import MongoClientMixin
from shorter.dao.mongo.helpers import handle_mongo_errors
from shorter.dao.exceptions import ShortURLAlreadyExistsError, ShortURLNotFoundError


def _as_utc(value: datetime | None) -> datetime | None:
    if value is None or value.tzinfo is not None:
        return value
    return value.replace(tzinfo=UTC)


class RedirectMongoDAO(MongoClientMixin, RedirectBaseDAO):
    """MongoDB-based Data Access Object (DAO) for managing redirects

    The `timeout` budget is applied with pymongo's client side operation
    timeout (`pymongo.timeout()`), which aborts in-flight I/O.
    """

    @handle_mongo_errors
    @beartype
    def insert(self, redirect: RedirectModel, timeout: int | float | None = None, **kwargs) -> 'RedirectMongoDAO':
        """Insert a redirect document

        Raises:
            ShortURLAlreadyExistsError:
                If the unique shortcode index rejects the document.
            DataStoreTimeoutError:
                If the time budget is spent or MongoDB times out.
            DataStoreError:
                On any other MongoDB failure.
        """
        ensure_time_left(timeout)

        document = {
            'shortcode': redirect.shortcode,
            'target': redirect.target,
            'created_at': redirect.created_at,
            'expires_at': redirect.expires_at,
        }
        try:
            with pymongo.timeout(timeout):
                self.collection.insert_one(document)
        except DuplicateKeyError as e:
            raise ShortURLAlreadyExistsError(f"Short URL with code '{redirect.shortcode}' already exists.") from e
        return self

    @handle_mongo_errors
    @beartype
    def get(self, shortcode: str, timeout: int | float | None = None, **kwargs) -> RedirectModel:
        """Retrieve a redirect document by shortcode

        Raises:
            ShortURLNotFoundError:
                If no document has this shortcode.
            DataStoreTimeoutError:
                If the time budget is spent or MongoDB times out.
            DataStoreError:
                On any other MongoDB failure.
        """
        ensure_time_left(timeout)

        with pymongo.timeout(timeout):
            document = self.collection.find_one({'shortcode': shortcode}, projection={'_id': False})

        if document is None:
            raise ShortURLNotFoundError(f"Short URL with code '{shortcode}' not found.")

        return RedirectModel(
            shortcode=document['shortcode'],
            target=document['target'],
            created_at=_as_utc(document['created_at']),
            expires_at=_as_utc(document.get('expires_at')),
        )
