import functools
from typing import TypeVar, Any
from collections.abc import Callable

from pymongo.errors import ConnectionFailure, PyMongoError

from shorter.dao.exceptions import DataStoreError, DataStoreTimeoutError


__all__ = []

F = TypeVar('F', bound=Callable[..., Any])


def handle_mongo_errors[F](method: F) -> F:
    """Wrap MongoDB-interacting DAO methods to translate pymongo errors

    Args:
        method (Callable[..., Any]):
            DAO method performing MongoDB operations which may raise pymongo.errors.PyMongoError.

    Returns:
        Callable[..., Any]:
            Wrapped method which raises DataStoreTimeoutError when an operation
            timed out and DataStoreError on any other MongoDB failure.

    Example:
        >>> @handle_mongo_errors
        ... def find(self, shortcode):
        ...     return self.collection.find_one({'shortcode': shortcode})
    """

    @functools.wraps(method)
    def wrapper(self, *args, **kwargs):
        try:
            return method(self, *args, **kwargs)
        except PyMongoError as e:
            namespace = self.collection.full_name
            if e.timeout:
                raise DataStoreTimeoutError(f'MongoDB operation on {namespace} timed out.') from e
            if isinstance(e, ConnectionFailure):
                raise DataStoreError(f"Can't connect to MongoDB for {namespace}.") from e
            raise DataStoreError(f'MongoDB operation on {namespace} failed: {e}') from e

    return wrapper
