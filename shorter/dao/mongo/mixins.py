"""MongoDB mixin providing shared client initialization, indexes and connectivity checks.

Responsibilities:
    - Initialize a MongoDB client and resolve the redirect collection
    - Ensure the unique shortcode index and the expiry TTL index exist
    - Healthcheck MongoDB client

Classes:
    - MongoClientMixin: Base mixin to inject MongoDB client setup & healthcheck.

Example:
    >>> class RedirectMongoDAO(MongoClientMixin, RedirectBaseDAO):
    ...     pass
    ...
    >>> dao = RedirectMongoDAO(mongo_uri="mongodb://localhost:27017")
    >>> dao._healthcheck()
    True
"""

from typing import Optional

from pymongo import ASCENDING, MongoClient
from pymongo.errors import PyMongoError

from shorter.constants import Defaults
from shorter.dao.exceptions import DataStoreError


class MongoClientMixin:
    """Mixin MongoDB client setup and health check for MongoDB-backed DAOs.

    Attributes:
        mongo (pymongo.MongoClient):
            Active MongoDB client. Its connection pool is shared by all requests.

        collection (pymongo.collection.Collection):
            Collection holding one document per redirect.
    """

    def __init__(
        self,
        mongo_uri: Optional[str] = Defaults.MONGO_URI,
        mongo_database: Optional[str] = Defaults.MONGO_DATABASE,
        mongo_collection: Optional[str] = Defaults.MONGO_COLLECTION,
        mongo_timeout: Optional[float] = Defaults.MONGO_TIMEOUT,
        mongo_client: Optional[MongoClient] = None,
    ):
        """Initialize a MongoDB-based DAO

        Args:
            mongo_uri (Optional[str]):
                MongoDB connection string.

            mongo_database (Optional[str]):
                Database name. Defaults to 'shorter'.

            mongo_collection (Optional[str]):
                Collection name. Defaults to 'redirect'.

            mongo_timeout (Optional[float]):
                Server selection timeout in seconds. Defaults to 60.

            mongo_client (Optional[MongoClient]):
                Pre-initialized MongoDB client. If None, a new client is created.

        Raises:
            DataStoreError:
                If MongoDB healthcheck or index creation fails.
        """
        if mongo_client is None:
            mongo_client = MongoClient(
                mongo_uri,
                serverSelectionTimeoutMS=int(float(mongo_timeout) * 1000),
                tz_aware=True,
            )

        self.mongo = mongo_client
        self.collection = self.mongo[mongo_database][mongo_collection]

        self._healthcheck()
        self._ensure_indexes()

    def _healthcheck(self, raise_error: bool = True) -> bool:
        """Ping MongoDB to healthcheck connectivity

        Raises:
            DataStoreError:
                If MongoDB cannot be reached and raise_error=True.
        """
        try:
            self.mongo.admin.command('ping')
        except PyMongoError as e:
            if raise_error:
                raise DataStoreError(
                    f"Can't connect to MongoDB for {self.collection.full_name}. Check the provided configuration parameters."
                ) from e
            return False
        else:
            return True

    def _ensure_indexes(self) -> None:
        # NOTE: the unique index is what makes insert_one() an atomic
        #       "create if absent"; without it duplicates would be accepted.
        try:
            self.collection.create_index([('shortcode', ASCENDING)], unique=True, name='shortcode_unique')
            self.collection.create_index([('expires_at', ASCENDING)], expireAfterSeconds=0, name='expires_at_ttl')
        except PyMongoError as e:
            raise DataStoreError(f"Can't create indexes on {self.collection.full_name}.") from e
