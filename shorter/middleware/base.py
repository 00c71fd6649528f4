"""Composable wrappers around a BaseShorterService.

A middleware is itself a BaseShorterService that delegates to the service
it wraps, so wrappers stack in any order without changing the contract.

Example:
    >>> service = chain(
    ...     core,
    ...     LoggingMiddleware,
    ...     lambda inner: RateLimitMiddleware(inner, TokenBucketLimiter(capacity=10)),
    ... )
    >>> service.shorten('https://example.com', caller='203.0.113.7')
"""

from collections.abc import Callable

from shorter.services.base import BaseShorterService, ShortenResult


type Middleware = Callable[[BaseShorterService], BaseShorterService]


class ServiceMiddleware(BaseShorterService):
    """Pass-through middleware; subclasses override what they need"""

    def __init__(self, service: BaseShorterService):
        self.service = service

    def shorten(self, target_url: str, *, caller: str | None = None, timeout: float | None = None) -> ShortenResult:
        return self.service.shorten(target_url, caller=caller, timeout=timeout)

    def resolve(self, code: str, *, caller: str | None = None, timeout: float | None = None) -> str:
        return self.service.resolve(code, caller=caller, timeout=timeout)


def chain(service: BaseShorterService, *middlewares: Middleware) -> BaseShorterService:
    """Wrap `service` in `middlewares`; the first one listed is the outermost"""
    for middleware in reversed(middlewares):
        service = middleware(service)
    return service
