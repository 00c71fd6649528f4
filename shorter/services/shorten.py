"""Shorten service

Turns a long URL into a persisted redirect:

    1. validate the target URL (no storage call on failure);
    2. propose a shortcode with the generator;
    3. insert the redirect; the data store rejects duplicates atomically;
    4. on a duplicate, go back to 2, at most `max_attempts` attempts in total;
    5. return the short link.

Codes are proposed optimistically and verified only by the atomic insert,
so no lock is needed to guarantee uniqueness.
"""

import time
import logging
from datetime import datetime, timedelta, UTC

from shorter.constants import Defaults
from shorter.dao.base import RedirectBaseDAO
from shorter.dao.exceptions import ShortURLAlreadyExistsError
from shorter.exceptions import GenerationExhaustedError, RequestCancelledError
from shorter.models import RedirectModel
from shorter.services.base import ShortenResult
from shorter.utils.helpers import get_short_url
from shorter.utils.shortener import ShortcodeGenerator
from shorter.utils.validators import validate_target_url


logger = logging.getLogger(__name__)


def deadline_after(timeout: float | None) -> float | None:
    return None if timeout is None else time.monotonic() + timeout


def remaining_time(deadline: float | None) -> float | None:
    """Return the seconds left before `deadline`

    Raises:
        RequestCancelledError:
            If the deadline has already passed.
    """
    if deadline is None:
        return None
    remaining = deadline - time.monotonic()
    if remaining <= 0:
        raise RequestCancelledError('Request deadline exceeded before reaching the data store.')
    return remaining


class ShortenService:
    """Generate, collision-check and persist shortcodes

    Attributes:
        dao (RedirectBaseDAO):
            Redirect store selected at startup.
        generator (ShortcodeGenerator):
            Candidate shortcode source.
        short_uri (str):
            Short-link base the shortcode is appended to.
        max_attempts (int):
            Total number of insert attempts before giving up.
        ttl (int | None):
            Optional lifetime in seconds handed to storage as an expiry hint.
    """

    def __init__(
        self,
        dao: RedirectBaseDAO,
        generator: ShortcodeGenerator,
        short_uri: str = Defaults.SHORT_URI,
        max_attempts: int = Defaults.MAX_ATTEMPTS,
        ttl: int | None = None,
    ):
        if max_attempts < 1:
            raise ValueError(f'max_attempts must be at least 1 (given value: {max_attempts}).')

        self.dao = dao
        self.generator = generator
        self.short_uri = short_uri
        self.max_attempts = max_attempts
        self.ttl = ttl

    def shorten(self, target_url: str, timeout: float | None = None) -> ShortenResult:
        """Persist a redirect to `target_url` under a fresh shortcode

        Args:
            target_url (str):
                Absolute http(s) URL to shorten.
            timeout (float | None):
                Time budget in seconds for the whole call, retries included.

        Returns:
            ShortenResult: short link and the persisted redirect.

        Raises:
            InvalidURLError:
                If `target_url` is malformed. The data store is not touched.
            GenerationExhaustedError:
                If all `max_attempts` candidates collided.
            RequestCancelledError:
                If the time budget ran out between attempts.
            DataStoreError:
                Propagated unchanged from the data store.
        """
        validate_target_url(target_url)

        deadline = deadline_after(timeout)
        last_error: ShortURLAlreadyExistsError | None = None

        for attempt in range(1, self.max_attempts + 1):
            remaining = remaining_time(deadline)
            shortcode = self.generator.generate()
            created_at = datetime.now(UTC)
            redirect = RedirectModel(
                shortcode=shortcode,
                target=target_url,
                created_at=created_at,
                expires_at=created_at + timedelta(seconds=self.ttl) if self.ttl else None,
            )

            try:
                self.dao.insert(redirect, timeout=remaining)
            except ShortURLAlreadyExistsError as e:
                last_error = e
                logger.warning(
                    'Shortcode collision, retrying with a new candidate.',
                    extra={'shortcode': shortcode, 'attempt': attempt, 'maxAttempts': self.max_attempts},
                )
                continue

            short_url = get_short_url(self.short_uri, shortcode)
            logger.debug('Persisted redirect.', extra={'shortcode': shortcode, 'attempt': attempt})
            return ShortenResult(short_url=short_url, redirect=redirect)

        logger.error(
            'Shortcode generation exhausted; widen the alphabet or code length.',
            extra={'attempts': self.max_attempts, 'strategy': self.generator.strategy},
        )
        raise GenerationExhaustedError(self.max_attempts) from last_error
