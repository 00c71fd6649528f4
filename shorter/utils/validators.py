"""Input validators for target URLs and shortcodes."""

from urllib.parse import urlsplit

from shorter.constants import Defaults
from shorter.exceptions import InvalidURLError


ALLOWED_SCHEMES = frozenset({'http', 'https'})


def validate_target_url(url: object, max_length: int = Defaults.MAX_URL_LENGTH) -> str:
    """Return `url` if it is a well-formed absolute http(s) URL

    Args:
        url (object):
            Candidate target URL, as received from a transport.
        max_length (int):
            Maximum accepted length (2048 per common browser limits).

    Returns:
        str: the URL, unchanged.

    Raises:
        InvalidURLError:
            If the URL is empty, too long, contains whitespace, has no
            http(s) scheme or has no host.

    Example:
        >>> validate_target_url('https://example.com/a?b=c')
        'https://example.com/a?b=c'
        >>> validate_target_url('not a url')
        Traceback (most recent call last):
            ...
        shorter.exceptions.InvalidURLError: Invalid target URL 'not a url': URL must not contain whitespace.
    """
    if not isinstance(url, str) or not url:
        raise InvalidURLError(url, 'URL must be a non-empty string')
    if len(url) > max_length:
        raise InvalidURLError(url, f'URL must be at most {max_length} characters long')
    if any(character.isspace() for character in url):
        raise InvalidURLError(url, 'URL must not contain whitespace')

    try:
        components = urlsplit(url)
        hostname = components.hostname
        components.port  # noqa: B018 raises ValueError on a malformed port
    except ValueError as e:
        raise InvalidURLError(url, str(e)) from e

    if components.scheme.lower() not in ALLOWED_SCHEMES:
        raise InvalidURLError(url, 'URL scheme must be http or https')
    if not hostname:
        raise InvalidURLError(url, 'URL must have a host')
    return url


def is_valid_shortcode(shortcode: object, alphabet: str, max_length: int = Defaults.MAX_CODE_LENGTH) -> bool:
    """Check whether `shortcode` could have been produced with `alphabet`

    Example:
        >>> is_valid_shortcode('abc123', 'abc123')
        True
        >>> is_valid_shortcode('../etc', 'abc123')
        False
    """
    if not isinstance(shortcode, str) or not shortcode or len(shortcode) > max_length:
        return False
    return set(shortcode) <= set(alphabet)
