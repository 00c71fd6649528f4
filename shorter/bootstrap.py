"""Startup assembly of the shorter service graph

    transport adapter -> LoggingMiddleware -> RateLimitMiddleware -> ShorterService
        -> ShortenService / ResolverService -> Redirect DAO -> data store

Functions:
    build_service(config, dao=None) -> BaseShorterService
        Wire a service graph from explicit configuration.
    get_service() -> BaseShorterService
        Process-wide service built once from load_config().
"""

import logging
import functools

from shorter.dao.base import RedirectBaseDAO
from shorter.dao.factory import create_dao
from shorter.middleware import LoggingMiddleware, RateLimitMiddleware, TokenBucketLimiter, chain
from shorter.services import BaseShorterService, ResolverService, ShortenService, ShorterService
from shorter.utils.config import ShorterConfig, load_config
from shorter.utils.logging import initialize_logging
from shorter.utils.shortener import ShortcodeGenerator


logger = logging.getLogger(__name__)


def build_service(config: ShorterConfig, dao: RedirectBaseDAO | None = None) -> BaseShorterService:
    """Assemble the shorter service described by `config`

    Args:
        config (ShorterConfig):
            Frozen application configuration.
        dao (RedirectBaseDAO | None):
            Redirect DAO to use instead of the one selected by `config.backend`.

    Returns:
        BaseShorterService: core facade wrapped in logging and rate-limit middleware.

    Raises:
        BadConfigurationError:
            If the configuration selects an unknown backend.
        DataStoreError:
            If the selected data store is unreachable.
    """
    dao = dao if dao is not None else create_dao(config)
    generator = ShortcodeGenerator(
        alphabet=config.shortcode.alphabet,
        max_length=config.shortcode.max_length,
        salt=config.shortcode.salt,
    )

    core = ShorterService(
        shortener=ShortenService(
            dao=dao,
            generator=generator,
            short_uri=config.short_uri,
            max_attempts=config.shortcode.max_attempts,
            ttl=config.shortcode.ttl,
        ),
        resolver=ResolverService(dao=dao, alphabet=generator.alphabet),
        default_timeout=config.request_timeout,
    )
    limiter = TokenBucketLimiter(
        capacity=config.rate_limit.bucket,
        refill_per_second=config.rate_limit.refill_per_second,
    )

    logger.info(
        'Shorter service assembled.',
        extra={
            'backend': config.backend,
            'strategy': generator.strategy,
            'maxAttempts': config.shortcode.max_attempts,
            'rateBucket': config.rate_limit.bucket,
        },
    )
    return chain(
        core,
        LoggingMiddleware,
        lambda service: RateLimitMiddleware(service, limiter),
    )


@functools.cache
def get_service() -> BaseShorterService:
    config = load_config()
    initialize_logging(config.log_level, config.log_path)
    return build_service(config)
