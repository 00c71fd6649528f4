from shorter.middleware.base import Middleware, ServiceMiddleware, chain
from shorter.middleware.logging import LoggingMiddleware
from shorter.middleware.rate_limit import RateLimitMiddleware, TokenBucketLimiter


__all__ = [
    'Middleware',
    'ServiceMiddleware',
    'chain',
    'LoggingMiddleware',
    'RateLimitMiddleware',
    'TokenBucketLimiter',
]
