from shorter.services.base import BaseShorterService, ShortenResult
from shorter.services.shorten import ShortenService
from shorter.services.resolve import ResolverService
from shorter.services.shorter_service import ShorterService


__all__ = [
    'BaseShorterService',
    'ShortenResult',
    'ShortenService',
    'ResolverService',
    'ShorterService',
]
