"""Service contract shared by the core facade and the middleware wrapping it.

Classes:
    ShortenResult:
        Outcome of a successful shorten call.
    BaseShorterService:
        Interface exposing `shorten` and `resolve` to transports.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass

from shorter.models import RedirectModel


@dataclass(frozen=True)
class ShortenResult:
    short_url: str  # Externally visible short link (short-link base + shortcode)
    redirect: RedirectModel  # Persisted redirect

    @property
    def shortcode(self) -> str:
        return self.redirect.shortcode


class BaseShorterService(ABC):
    """Transport-agnostic shorten/resolve capability.

    Both methods raise instead of returning error values; see
    shorter.exceptions and shorter.dao.exceptions for the taxonomy.

    Keyword arguments:
        caller (str | None):
            Identity used by rate limiting (e.g. client IP). Ignored by the core.
        timeout (float | None):
            Time budget for the call in seconds.
    """

    @abstractmethod
    def shorten(self, target_url: str, *, caller: str | None = None, timeout: float | None = None) -> ShortenResult:
        """Persist a new redirect for `target_url` and return its short link"""
        pass

    @abstractmethod
    def resolve(self, code: str, *, caller: str | None = None, timeout: float | None = None) -> str:
        """Return the target URL stored for `code`"""
        pass
