"""In-process implementation of RedirectBaseDAO

Keeps redirects in a dict owned by the DAO instance. Intended for local
development and tests; data lives as long as the process.
"""

import threading

from beartype import beartype

from shorter.models import RedirectModel
from shorter.dao.base import RedirectBaseDAO
from shorter.dao.helpers import ensure_time_left
from shorter.dao.exceptions import ShortURLAlreadyExistsError, ShortURLNotFoundError


class RedirectMemoryDAO(RedirectBaseDAO):
    """Dictionary-backed Redirect DAO

    Attributes:
        redirects (dict[str, RedirectModel]):
            Stored redirects keyed by shortcode.
    """

    def __init__(self):
        self.redirects: dict[str, RedirectModel] = {}
        self._lock = threading.Lock()

    @beartype
    def insert(self, redirect: RedirectModel, timeout: int | float | None = None, **kwargs) -> 'RedirectMemoryDAO':
        ensure_time_left(timeout)

        with self._lock:
            if redirect.shortcode in self.redirects:
                raise ShortURLAlreadyExistsError(f"Short URL with code '{redirect.shortcode}' already exists.")
            self.redirects[redirect.shortcode] = redirect
        return self

    @beartype
    def get(self, shortcode: str, timeout: int | float | None = None, **kwargs) -> RedirectModel:
        ensure_time_left(timeout)

        redirect = self.redirects.get(shortcode)
        if redirect is None:
            raise ShortURLNotFoundError(f"Short URL with code '{shortcode}' not found.")
        return redirect
