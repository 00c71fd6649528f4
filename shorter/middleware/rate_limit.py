"""Rate-limiting middleware

Token bucket per caller: a bucket holds at most `capacity` tokens and
refills at `refill_per_second`. Each shorten/resolve call takes one token.
An empty bucket fails the call immediately with RateLimitExceededError;
the wrapped service is not invoked and the caller never blocks.
"""

import time
import logging
import threading
from collections.abc import Callable

from shorter.constants import Defaults
from shorter.exceptions import RateLimitExceededError
from shorter.middleware.base import ServiceMiddleware
from shorter.services.base import BaseShorterService, ShortenResult


logger = logging.getLogger(__name__)

ANONYMOUS_CALLER = 'anonymous'


class TokenBucketLimiter:
    """Thread-safe token buckets keyed by caller

    Attributes:
        capacity (int):
            Maximum number of tokens (burst size).
        refill_per_second (float):
            Tokens added per second.
        max_buckets (int):
            Above this many tracked callers, full buckets are forgotten. The
            scan runs at most once per `capacity / refill_per_second` seconds,
            the time an empty bucket takes to fill up again.
    """

    def __init__(
        self,
        capacity: int = Defaults.RATE_BUCKET,
        refill_per_second: float = Defaults.RATE_REFILL,
        clock: Callable[[], float] = time.monotonic,
        max_buckets: int = 10_000,
    ):
        if capacity < 1:
            raise ValueError(f'capacity must be at least 1 (given value: {capacity}).')
        if refill_per_second <= 0:
            raise ValueError(f'refill_per_second must be positive (given value: {refill_per_second}).')

        self.capacity = capacity
        self.refill_per_second = refill_per_second
        self.max_buckets = max_buckets
        self._clock = clock
        self._buckets: dict[str, tuple[float, float]] = {}  # key -> (tokens, last refill)
        self._prune_interval = capacity / refill_per_second
        self._next_prune = float('-inf')
        self._lock = threading.Lock()

    def acquire(self, key: str) -> float:
        """Take one token from `key`'s bucket

        Returns:
            float: 0.0 if a token was taken, otherwise the seconds until one is available.
        """
        with self._lock:
            now = self._clock()
            tokens, last = self._buckets.get(key, (float(self.capacity), now))
            tokens = min(float(self.capacity), tokens + (now - last) * self.refill_per_second)

            if tokens >= 1.0:
                self._buckets[key] = (tokens - 1.0, now)
                self._prune(now)
                return 0.0

            self._buckets[key] = (tokens, now)
            return (1.0 - tokens) / self.refill_per_second

    def _prune(self, now: float) -> None:
        if len(self._buckets) <= self.max_buckets or now < self._next_prune:
            return
        self._next_prune = now + self._prune_interval
        for key, (tokens, last) in list(self._buckets.items()):
            if tokens + (now - last) * self.refill_per_second >= self.capacity:
                del self._buckets[key]


class RateLimitMiddleware(ServiceMiddleware):
    def __init__(self, service: BaseShorterService, limiter: TokenBucketLimiter):
        super().__init__(service)
        self.limiter = limiter

    def shorten(self, target_url: str, *, caller: str | None = None, timeout: float | None = None) -> ShortenResult:
        self._admit(caller)
        return self.service.shorten(target_url, caller=caller, timeout=timeout)

    def resolve(self, code: str, *, caller: str | None = None, timeout: float | None = None) -> str:
        self._admit(caller)
        return self.service.resolve(code, caller=caller, timeout=timeout)

    def _admit(self, caller: str | None) -> None:
        key = caller or ANONYMOUS_CALLER
        retry_after = self.limiter.acquire(key)
        if retry_after > 0:
            logger.warning('Rate limit exceeded.', extra={'caller': key, 'retryAfter': round(retry_after, 3)})
            raise RateLimitExceededError(key, retry_after)
