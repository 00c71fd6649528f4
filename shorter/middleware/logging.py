"""Logging middleware

Logs every shorten/resolve call with its inputs, duration and outcome.
Results and exceptions pass through untouched.
"""

import time
import logging
from typing import Any
from collections.abc import Callable
from urllib.parse import urlsplit, urlunsplit

from shorter.middleware.base import ServiceMiddleware
from shorter.services.base import ShortenResult


logger = logging.getLogger(__name__)


def redact_url(url: object) -> str:
    """Strip credentials, query string and fragment from a URL before it is logged

    Example:
        >>> redact_url('https://user:pw@example.com/a?token=secret#top')
        'https://example.com/a'
    """
    try:
        components = urlsplit(str(url))
        netloc = components.hostname or ''
        if components.port:
            netloc = f'{netloc}:{components.port}'
    except ValueError:
        return '<unparseable>'
    return urlunsplit((components.scheme, netloc, components.path, '', ''))


class LoggingMiddleware(ServiceMiddleware):
    def shorten(self, target_url: str, *, caller: str | None = None, timeout: float | None = None) -> ShortenResult:
        return self._logged(
            'shorten',
            {'targetUrl': redact_url(target_url), 'caller': caller},
            lambda: self.service.shorten(target_url, caller=caller, timeout=timeout),
        )

    def resolve(self, code: str, *, caller: str | None = None, timeout: float | None = None) -> str:
        return self._logged(
            'resolve',
            {'shortcode': str(code)[:64], 'caller': caller},
            lambda: self.service.resolve(code, caller=caller, timeout=timeout),
        )

    def _logged(self, method: str, inputs: dict[str, Any], call: Callable[[], Any]) -> Any:
        start = time.perf_counter()
        try:
            result = call()
        except Exception as e:
            logger.info(
                '%s failed.',
                method,
                extra={
                    'method': method,
                    **inputs,
                    'durationMs': round((time.perf_counter() - start) * 1000, 2),
                    'outcome': getattr(e, 'error_code', type(e).__name__),
                },
            )
            raise

        details = {'shortcode': result.shortcode} if isinstance(result, ShortenResult) else {}
        logger.info(
            '%s succeeded.',
            method,
            extra={
                'method': method,
                **inputs,
                **details,
                'durationMs': round((time.perf_counter() - start) * 1000, 2),
                'outcome': 'ok',
            },
        )
        return result
