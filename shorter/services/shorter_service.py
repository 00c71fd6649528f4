from shorter.services.base import BaseShorterService, ShortenResult
from shorter.services.resolve import ResolverService
from shorter.services.shorten import ShortenService


class ShorterService(BaseShorterService):
    """Core facade combining the shorten and resolve services

    Attributes:
        shortener (ShortenService)
        resolver (ResolverService)
        default_timeout (float | None):
            Budget applied when a caller passes no timeout.
    """

    def __init__(self, shortener: ShortenService, resolver: ResolverService, default_timeout: float | None = None):
        self.shortener = shortener
        self.resolver = resolver
        self.default_timeout = default_timeout

    def shorten(self, target_url: str, *, caller: str | None = None, timeout: float | None = None) -> ShortenResult:
        return self.shortener.shorten(target_url, timeout=self._budget(timeout))

    def resolve(self, code: str, *, caller: str | None = None, timeout: float | None = None) -> str:
        return self.resolver.resolve(code, timeout=self._budget(timeout))

    def _budget(self, timeout: float | None) -> float | None:
        return self.default_timeout if timeout is None else timeout
