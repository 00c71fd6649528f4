"""Application-level exceptions.

Every exception carries a stable `error_code` which transports surface to
clients unchanged. Storage-level exceptions live in `shorter.dao.exceptions`.
"""


class ShorterError(Exception):
    """Base exception for all application-specific errors."""

    error_code = 'app:shorter_error'


class InvalidURLError(ShorterError):
    """Raised when a target URL is not a well-formed absolute http(s) URL."""

    error_code = 'app:invalid_url_error'

    def __init__(self, url: object, reason: str = 'invalid URL format'):
        self.url = url
        self.reason = reason
        super().__init__(f'Invalid target URL {url!r}: {reason}.')


class CodeNotFoundError(ShorterError):
    """Raised when a shortcode has no stored redirect."""

    error_code = 'app:code_not_found_error'

    def __init__(self, shortcode: str):
        self.shortcode = shortcode
        super().__init__(f"Short URL with code '{shortcode}' not found.")


class GenerationExhaustedError(ShorterError):
    """Raised when every generated shortcode collided with a stored one.

    Signals that the alphabet or code length is undersized for the current
    store cardinality, or a generator defect.
    """

    error_code = 'app:generation_exhausted_error'

    def __init__(self, attempts: int):
        self.attempts = attempts
        super().__init__(f'Could not generate a unique shortcode after {attempts} attempts.')


class RequestCancelledError(ShorterError):
    """Raised when a request's time budget ran out before storage was reached."""

    error_code = 'app:request_cancelled_error'


class RateLimitExceededError(ShorterError):
    """Raised by the rate-limiting middleware when a caller's bucket is empty."""

    error_code = 'app:rate_limit_exceeded_error'

    def __init__(self, caller: str, retry_after: float):
        self.caller = caller
        self.retry_after = retry_after
        super().__init__(f'Rate limit exceeded for {caller}. Retry after {retry_after:.2f}s.')


class ConfigurationError(ShorterError):
    """Base exception for all configuration errors."""

    error_code = 'config:configuration_error'


class BadConfigurationError(ConfigurationError):
    """Raised when the application is configured with invalid parameters."""

    error_code = 'config:bad_configuration_error'
