"""Helper utilities for the transport handlers.

Functions:
    get_short_url(short_uri, shortcode) -> str
        Compose the externally visible short link for a shortcode
    json_response(status_code, body, headers=None) -> dict
        Build a handler response with a JSON body
    guarantee_500_response(handler) -> Callable
        Decorator: turn unexpected handler exceptions into a JSON 500 response

Example:
    >>> get_short_url('https://s.example.com/', 'abc123')
    'https://s.example.com/abc123'
"""

import json
import logging
import functools
from typing import Any
from collections.abc import Callable

from shorter.constants import UNKNOWN_INTERNAL_SERVER_ERROR
from shorter.utils.runtime import running_locally


logger = logging.getLogger(__name__)


def get_short_url(short_uri: str, shortcode: str) -> str:
    """Get string representation of a short link

    Args:
        short_uri (str): configured short-link base, e.g. 'https://s.example.com'
        shortcode (str): shortcode

    Returns:
        str: short url string representation
    """
    return f'{short_uri.rstrip("/")}/{shortcode}'


def json_response(status_code: int, body: dict[str, Any], headers: dict[str, str] | None = None) -> dict[str, Any]:
    return {
        'statusCode': status_code,
        'headers': {'Content-Type': 'application/json', **(headers or {})},
        'body': json.dumps(body),
    }


def guarantee_500_response(handler: Callable) -> Callable:
    """Decorator: respond with a JSON 500 instead of leaking unexpected exceptions

    When running locally the exception is re-raised so it surfaces in the
    developer's traceback.

    Example:
        >>> @guarantee_500_response
        ... def handler(event, context):
        ...     raise RuntimeError('boom')
        >>> handler({}, None)['statusCode']
        500
    """

    @functools.wraps(handler)
    def wrapper(event: dict[str, Any], context: Any, *args, **kwargs) -> dict[str, Any]:
        try:
            return handler(event, context, *args, **kwargs)
        except Exception:
            if running_locally():
                raise
            logger.exception('Unhandled exception in handler. Responding with 500.', extra={'handler': handler.__name__})
            return json_response(500, {'message': 'Internal Server Error', 'error_code': UNKNOWN_INTERNAL_SERVER_ERROR})

    return wrapper
