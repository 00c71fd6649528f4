"""Redis mixin providing shared client initialization and connectivity checks.

Responsibilities:
    - Initialize a single-node or cluster Redis client
    - Healthcheck Redis client

Classes:
    - RedisClientMixin: Base mixin to inject Redis key management, client setup & healthcheck.

Example:
    Typical usage with a DAO implementation:

        >>> class RedirectRedisDAO(RedisClientMixin, RedirectBaseDAO):
        ...     pass
        ...
        >>> dao = RedirectRedisDAO(redis_hosts="localhost:6379", prefix="shorter:prod")
        >>> dao._healthcheck()
        True
"""

from typing import Optional

import redis
from redis.cluster import ClusterNode, RedisCluster

from shorter.constants import Defaults, RedisDrive
from shorter.dao.redis.redis_key_schema import RedisKeySchema
from shorter.dao.redis.helpers import describe_client, parse_hosts
from shorter.dao.exceptions import DataStoreError


class RedisClientMixin:
    """Mixin Redis client setup and health check for Redis-backed DAOs.

    Attributes:
        redis (redis.Redis | redis.cluster.RedisCluster):
            Active Redis client instance used by subclasses.

        keys (RedisKeySchema):
            Helper class for generating namespaced Redis key names.

    Methods:
        _healthcheck(raise_error: bool = True) -> bool:
            Ping Redis to verify connectivity.
            Optionally raise a DataStoreError if unreachable.
    """

    def __init__(
        self,
        redis_drive: Optional[str] = RedisDrive.SINGLE,
        redis_hosts: Optional[str] = Defaults.REDIS_HOSTS,
        redis_db: Optional[int] = 0,
        redis_decode_responses: Optional[bool] = True,
        redis_username: Optional[str] = None,
        redis_password: Optional[str] = None,
        redis_socket_timeout: Optional[float] = None,
        redis_client: Optional[redis.Redis] = None,
        prefix: Optional[str] = None,
    ):
        """Initialize a Redis-based DAO

        The option is given to either use an existing Redis client instance or
        create one via the appropriate Redis connection parameters.

        Args:
            redis_drive (Optional[str]):
                'single' for one Redis server, 'cluster' for a Redis Cluster.

            redis_hosts (Optional[str]):
                Redis nodes as 'host:port', several nodes separated by ';'.
                A single-node client uses the first node only.

            redis_db (Optional[int]):
                Redis database index. Ignored in cluster mode. Defaults to 0.

            redis_decode_responses (Optional[bool]):
                If True, decodes Redis responses. Defaults to True.

            redis_username (Optional[str]):
                Username for Redis authentication (if required).

            redis_password (Optional[str]):
                Password for Redis authentication (if required).

            redis_socket_timeout (Optional[float]):
                Seconds after which a blocked Redis command is aborted.

            redis_client (Optional[redis.Redis]):
                Pre-initialized Redis client. If None, a new client is created.

            prefix (Optional[str]):
                Namespace prefix for all Redis keys, e.g. 'app:env'.

        Raises:
            DataStoreError:
                If Redis healthcheck fails (connectivity issues).
        """
        if redis_client is None:
            nodes = parse_hosts(redis_hosts or Defaults.REDIS_HOSTS)
            if not nodes:
                raise DataStoreError(f'No Redis hosts configured (given value: {redis_hosts!r}).')

            if redis_drive == RedisDrive.CLUSTER:
                redis_client = RedisCluster(
                    startup_nodes=[ClusterNode(host, port) for host, port in nodes],
                    decode_responses=redis_decode_responses,
                    username=redis_username,
                    password=redis_password,
                    socket_timeout=redis_socket_timeout,
                )
            else:
                host, port = nodes[0]
                redis_client = redis.Redis(
                    host=host,
                    port=port,
                    db=int(redis_db),
                    decode_responses=redis_decode_responses,
                    username=redis_username,
                    password=redis_password,
                    socket_timeout=redis_socket_timeout,
                )

        self.redis = redis_client
        self.keys = RedisKeySchema(prefix=prefix)

        self._healthcheck()

    def _healthcheck(self, raise_error: bool = True) -> bool:
        """PING Redis to healthcheck connectivity

        Args:
            raise_error (bool):
                If True, raises DataStoreError on failure. Defaults to True.

        Returns:
            bool:
                True if Redis is reachable, False otherwise (only if raise_error=False).

        Raises:
            DataStoreError:
                If Redis connection cannot be established and raise_error=True.
        """
        try:
            self.redis.ping()
        except redis.exceptions.RedisError as e:
            if raise_error:
                raise DataStoreError(
                    f"Can't connect to Redis at {describe_client(self.redis)}. Check the provided configuration parameters."
                ) from e
            return False
        else:
            return True
