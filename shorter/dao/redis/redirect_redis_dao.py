"""Data Access Object (DAO) implementation for managing redirects in Redis

This module provides a Redis-based implementation of RedirectBaseDAO.

Responsibilities:
    - Insert and retrieve redirects from Redis;
    - Hand the optional expiry over to Redis as a key expiry (EXAT);
    - Provide error handling and raise appropriate DAO exceptions.

Storage layout:
    <prefix>:redirects:<shortcode> -> '{"target": ..., "created_at": ..., "expires_at": ...}'

Example:
    >>> from shorter.models import RedirectModel
    >>> from shorter.dao.redis import RedirectRedisDAO

    >>> dao = RedirectRedisDAO(prefix="shorter:dev")

    >>> dao.insert(RedirectModel(shortcode="abc123", target="https://example.com/page"))
    <RedirectRedisDAO>

    >>> dao.get("abc123").target
    'https://example.com/page'
"""

import json
from datetime import datetime

from beartype import beartype

from shorter.models import RedirectModel
from shorter.dao.base import RedirectBaseDAO
from shorter.dao.helpers import ensure_time_left
from shorter.dao.redis.mixins import RedisClientMixin
from shorter.dao.redis.helpers import handle_redis_connection_error
from shorter.dao.exceptions import ShortURLAlreadyExistsError, ShortURLNotFoundError


class RedirectRedisDAO(RedisClientMixin, RedirectBaseDAO):
    """Redis-based Data Access Object (DAO) for managing redirects

    Attributes (see RedisClientMixin):
        redis (redis.Redis):
            Redis client used to communicate with the Redis datastore.
        keys (RedisKeySchema):
            Key schema helper for generating namespaced Redis keys.

    NOTE:
        Redis has no per-command timeout. The `timeout` budget is checked
        before a command is sent; in-flight commands are bounded by the
        client's `socket_timeout`.
    """

    @handle_redis_connection_error
    @beartype
    def insert(self, redirect: RedirectModel, timeout: int | float | None = None, **kwargs) -> 'RedirectRedisDAO':
        """Insert a redirect into Redis

        The insertion is a single SET NX command, so two concurrent inserts for
        the same shortcode can never both succeed.

        Args:
            redirect (RedirectModel):
                RedirectModel instance representing the code to URL mapping.
            timeout (int | float | None):
                Remaining time budget in seconds.
            **kwargs:
                Optional keyword arguments (for future use).

        Returns:
            RedirectRedisDAO: self (for method chaining)

        Raises:
            ShortURLAlreadyExistsError:
                If a redirect with the same shortcode already exists.
            DataStoreTimeoutError:
                If the time budget is spent or Redis times out.
            DataStoreError:
                If a Redis connection issue occurs.
        """
        ensure_time_left(timeout)

        key = self.keys.redirect_key(redirect.shortcode)
        document = json.dumps(
            {
                'target': redirect.target,
                'created_at': redirect.created_at.isoformat(),
                'expires_at': redirect.expires_at.isoformat() if redirect.expires_at else None,
            }
        )
        expire_at = int(redirect.expires_at.timestamp()) if redirect.expires_at else None

        if not self.redis.set(key, document, nx=True, exat=expire_at):
            raise ShortURLAlreadyExistsError(f"Short URL with code '{redirect.shortcode}' already exists.")
        return self

    @handle_redis_connection_error
    @beartype
    def get(self, shortcode: str, timeout: int | float | None = None, **kwargs) -> RedirectModel:
        """Retrieve a stored redirect by shortcode

        Args:
            shortcode (str):
                The shortcode identifier for the redirect.
            timeout (int | float | None):
                Remaining time budget in seconds.
            **kwargs:
                Optional keyword arguments (for future use).

        Returns:
            RedirectModel:
                The retrieved RedirectModel instance.

        Raises:
            ShortURLNotFoundError:
                If the redirect does not exist in Redis.
            DataStoreTimeoutError:
                If the time budget is spent or Redis times out.
            DataStoreError:
                If Redis connectivity issues occur.

        Example:
            >>> dao.get('abc123')
            RedirectModel(shortcode='abc123', target='https://example.com', ...)
        """
        ensure_time_left(timeout)

        raw = self.redis.get(self.keys.redirect_key(shortcode))
        if raw is None:
            raise ShortURLNotFoundError(f"Short URL with code '{shortcode}' not found.")

        document = json.loads(raw)
        expires_at = document.get('expires_at')
        return RedirectModel(
            shortcode=shortcode,
            target=document['target'],
            created_at=datetime.fromisoformat(document['created_at']),
            expires_at=datetime.fromisoformat(expires_at) if expires_at else None,
        )
