"""Abstract base class for Redirect data access objects (DAOs).

This class establishes a consistent contract for all Redirect DAO implementations,
regardless of the underlying storage mechanism (e.g., MongoDB, Redis, memory).

Responsibilities:
    - Provide an interface for inserting and retrieving RedirectModel objects.
    - Standardize error handling across multiple data store implementations.
    - Enforce a consistent API for use by the shorten and resolve services.

Example:
    Typical usage with a datastore-specific implementation:

        >>> from shorter.models import RedirectModel
        >>> from shorter.dao.redis import RedirectRedisDAO

        >>> dao = RedirectRedisDAO(...)

        >>> redirect = RedirectModel(
        ...     shortcode="a1b2c3",
        ...     target="https://example.com/blog/article-123",
        ... )
        >>> dao.insert(redirect)

        >>> retrieved = dao.get("a1b2c3")
        >>> print(retrieved.target)
        https://example.com/blog/article-123

        >>> print(retrieved.expires_at)
        None
"""

from abc import ABC, abstractmethod

from shorter.models import RedirectModel


class RedirectBaseDAO(ABC):
    """Interface for Redirect data access objects (DAOs).

    Methods:
        insert(redirect: RedirectModel, **kwargs) -> RedirectBaseDAO:
            Atomically insert a new RedirectModel into the data store.
            Raises ShortURLAlreadyExistsError if the shortcode already exists.
            Raises DataStoreError on connection or write failure.

        get(shortcode: str, **kwargs) -> RedirectModel:
            Retrieve a RedirectModel from the data store by shortcode.
            Raises ShortURLNotFoundError if the entry does not exist.
            Raises DataStoreError on connection or read failure.

    Subclassing:
        Datastore-specific implementations (e.g., RedirectRedisDAO or
        RedirectMongoDAO) must extend this class and implement all
        abstract methods.

    NOTE:
        - Redirects are write-once. The DAO does not provide an interface
          to update or delete entries.
        - Both methods accept a `timeout` keyword argument holding the
          caller's remaining time budget in seconds. A non-positive budget
          must raise DataStoreTimeoutError without touching the data store.
    """

    @abstractmethod
    def insert(self, redirect: RedirectModel, **kwargs) -> 'RedirectBaseDAO':
        """Insert a new RedirectModel into the data store.

        The insert must be a single atomic operation from the data store's
        point of view: there is no window between checking for an existing
        shortcode and writing the new one.

        Args:
            redirect (RedirectModel):
                The RedirectModel instance to be inserted.

            **kwargs:
                Additional keyword arguments, used by data store (e.g. timeout).

        Returns:
            RedirectBaseDAO: self (for method chaining)

        Raises:
            ShortURLAlreadyExistsError:
                If a RedirectModel with the same shortcode already exists

            DataStoreError:
                If there is an error in the data store.
        """
        pass

    @abstractmethod
    def get(self, shortcode: str, **kwargs) -> RedirectModel:
        """Retrieve a RedirectModel from the data store by its shortcode.

        Args:
            shortcode (str):
                The shortcode of the RedirectModel to be retrieved.

            **kwargs:
                Additional keyword arguments, used by data store (e.g. timeout).

        Returns:
            RedirectModel: The stored RedirectModel instance.

        Raises:
            ShortURLNotFoundError:
                If no RedirectModel with the given shortcode exists.

            DataStoreError:
                If there is an error in the data store.
        """
        pass
