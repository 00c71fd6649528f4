import functools
import redis
from typing import TypeVar, Any
from collections.abc import Callable
from redis.cluster import RedisCluster

from shorter.dao.exceptions import DataStoreError, DataStoreTimeoutError


__all__ = ['describe_client', 'parse_hosts']

F = TypeVar('F', bound=Callable[..., Any])


def describe_client(client: Any) -> str:
    """Return a '<host>:<port>/<db>' description of a Redis client for error messages

    Cluster clients have no single connection pool and are described by
    their known nodes instead, e.g. 'cluster[redis-1:7000,redis-2:7001]'.
    """
    if isinstance(client, RedisCluster):
        return f"cluster[{','.join(node.name for node in client.get_nodes())}]"
    pool = getattr(client, 'connection_pool', None)
    info = getattr(pool, 'connection_kwargs', None) or {}
    return f"{info.get('host')}:{info.get('port')}/{info.get('db')}"


def parse_hosts(hosts: str) -> list[tuple[str, int]]:
    """Split a 'host:port;host:port' string into (host, port) pairs

    A host without a port defaults to 6379. Empty segments are ignored.

    Example:
        >>> parse_hosts('redis-1:7000;redis-2')
        [('redis-1', 7000), ('redis-2', 6379)]
    """
    nodes = []
    for segment in hosts.split(';'):
        segment = segment.strip()
        if not segment:
            continue
        host, _, port = segment.rpartition(':') if ':' in segment else (segment, '', '6379')
        nodes.append((host, int(port)))
    return nodes


def handle_redis_connection_error[F](method: F) -> F:
    """Wrap Redis-interacting DAO methods to translate redis-py errors

    Args:
        method (Callable[..., Any]):
            DAO method performing Redis operations which may raise redis.exceptions.RedisError.

    Returns:
        Callable[..., Any]:
            Wrapped method which raises DataStoreTimeoutError on timeouts and
            DataStoreError on connectivity issues or other Redis failures.

    Example:
        >>> @handle_redis_connection_error
        ... def get_redirect(self, key):
        ...     return self.redis.get(key)
    """

    @functools.wraps(method)
    def wrapper(self, *args, **kwargs):
        try:
            return method(self, *args, **kwargs)
        except redis.exceptions.TimeoutError as e:
            raise DataStoreTimeoutError(f'Redis at {describe_client(self.redis)} timed out.') from e
        except redis.exceptions.ConnectionError as e:
            raise DataStoreError(f"Can't connect to Redis at {describe_client(self.redis)}.") from e
        except redis.exceptions.RedisError as e:
            raise DataStoreError(f'Redis at {describe_client(self.redis)} failed: {e}') from e

    return wrapper
