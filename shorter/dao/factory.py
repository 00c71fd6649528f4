"""Startup selection of the Redirect DAO

The active backend is chosen once, from explicit configuration, when the
service graph is assembled. It stays fixed for the process lifetime.

Example:
    >>> from shorter.utils.config import load_config
    >>> from shorter.dao.factory import create_dao
    >>> dao = create_dao(load_config())
    >>> type(dao).__name__
    'RedirectMongoDAO'
"""

import logging

from shorter.constants import Backend, Defaults
from shorter.dao.base import RedirectBaseDAO
from shorter.dao.memory import RedirectMemoryDAO
from shorter.dao.mongo import RedirectMongoDAO
from shorter.dao.redis import RedirectRedisDAO
from shorter.exceptions import BadConfigurationError
from shorter.utils.config import ShorterConfig


logger = logging.getLogger(__name__)


def redis_socket_timeout(config: ShorterConfig) -> float:
    """Return the Redis socket timeout, falling back to the request budget

    redis-py blocks on I/O forever without a socket timeout, so one is always set.
    """
    if config.redis.socket_timeout is not None:
        return config.redis.socket_timeout
    if config.request_timeout is not None:
        return config.request_timeout
    return Defaults.REDIS_SOCKET_TIMEOUT


def create_dao(config: ShorterConfig) -> RedirectBaseDAO:
    """Build the Redirect DAO selected by `config.backend`

    Raises:
        BadConfigurationError:
            If the backend name is unknown.
        DataStoreError:
            If the selected data store is unreachable.
    """
    match config.backend:
        case Backend.MONGO:
            logger.info('Using MongoDB redirect store.', extra={'collection': config.mongo.collection})
            return RedirectMongoDAO(
                mongo_uri=config.mongo.uri,
                mongo_database=config.mongo.database,
                mongo_collection=config.mongo.collection,
                mongo_timeout=config.mongo.timeout,
            )
        case Backend.REDIS:
            logger.info('Using Redis redirect store.', extra={'drive': config.redis.drive, 'prefix': config.redis.prefix})
            return RedirectRedisDAO(
                redis_drive=config.redis.drive,
                redis_hosts=config.redis.hosts,
                redis_db=config.redis.db,
                redis_username=config.redis.username,
                redis_password=config.redis.password,
                redis_socket_timeout=redis_socket_timeout(config),
                prefix=config.redis.prefix,
            )
        case Backend.MEMORY:
            logger.warning('Using in-memory redirect store; redirects are lost on restart.')
            return RedirectMemoryDAO()
        case _:
            raise BadConfigurationError(f'Unknown storage backend {config.backend!r}.')
