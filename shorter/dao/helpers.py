from shorter.dao.exceptions import DataStoreTimeoutError


__all__ = ['ensure_time_left']


def ensure_time_left(timeout: float | None) -> None:
    """Refuse to start data store I/O once the caller's time budget is spent

    Args:
        timeout (float | None):
            Remaining time budget in seconds. None means no budget.

    Raises:
        DataStoreTimeoutError:
            If the budget is zero or negative.

    Example:
        >>> ensure_time_left(None)
        >>> ensure_time_left(-0.5)
        Traceback (most recent call last):
            ...
        shorter.dao.exceptions.DataStoreTimeoutError: Time budget exhausted before reaching the data store.
    """
    if timeout is not None and timeout <= 0:
        raise DataStoreTimeoutError('Time budget exhausted before reaching the data store.')
