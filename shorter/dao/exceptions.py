"""Exceptions related to Data Access Objects (DAO) operations.

Classes:
    DAOError:
        Generic base class for DAO-related exceptions.

    ShortURLNotFoundError:
        Raised when a RedirectModel is not found in the data store.

    ShortURLAlreadyExistsError:
        Raised when attempting to insert a RedirectModel whose shortcode already exists.

    DataStoreError:
        Raised when there is an error in the data store (e.g., connection issues, OOM, etc.).

    DataStoreTimeoutError:
        Raised when a data store operation runs out of time.

Example:
    >>> from shorter.dao.exceptions import ShortURLNotFoundError
    >>> raise ShortURLNotFoundError("Short URL with code 'abc123' not found.")
    Traceback (most recent call last):
        ...
    shorter.dao.exceptions.ShortURLNotFoundError: Short URL with code 'abc123' not found.
"""


class DAOError(Exception):
    """Generic base class for DAO-related exceptions."""

    error_code = 'dao:dao_error'


class ShortURLNotFoundError(DAOError):
    """Exception raised when a RedirectModel is not found in the data store."""

    error_code = 'dao:short_url_not_found_error'


class ShortURLAlreadyExistsError(DAOError):
    """Exception raised when attempting to insert a RedirectModel that already exists in the data store."""

    error_code = 'dao:short_url_already_exists_error'


class DataStoreError(DAOError):
    """Exception raised when there is an error in the data store.

    e.g. connection issues, OOM, etc.
    """

    error_code = 'dao:data_store_error'


class DataStoreTimeoutError(DataStoreError):
    """Exception raised when a data store operation exceeds its time budget."""

    error_code = 'dao:data_store_timeout_error'
