import logging

from shorter.constants import Defaults
from shorter.dao.base import RedirectBaseDAO
from shorter.dao.exceptions import ShortURLNotFoundError
from shorter.exceptions import CodeNotFoundError
from shorter.services.shorten import deadline_after, remaining_time
from shorter.utils.validators import is_valid_shortcode


logger = logging.getLogger(__name__)


class ResolverService:
    """Read-only lookup of a shortcode's target URL

    Every call is a fresh data store lookup; nothing is cached. Expiry is
    not enforced here: a redirect past its `expires_at` still resolves for
    as long as the data store keeps it.
    """

    def __init__(self, dao: RedirectBaseDAO, alphabet: str = Defaults.ALPHABET):
        self.dao = dao
        self.alphabet = alphabet

    def resolve(self, code: str, timeout: float | None = None) -> str:
        """Return the target URL stored for `code`

        Raises:
            CodeNotFoundError:
                If `code` is malformed or has no stored redirect.
            RequestCancelledError:
                If the time budget is already spent.
            DataStoreError:
                Propagated unchanged from the data store.
        """
        if not is_valid_shortcode(code, self.alphabet):
            logger.debug('Rejected malformed shortcode without lookup.', extra={'shortcode': str(code)[:64]})
            raise CodeNotFoundError(str(code))

        remaining = remaining_time(deadline_after(timeout))
        try:
            redirect = self.dao.get(code, timeout=remaining)
        except ShortURLNotFoundError as e:
            raise CodeNotFoundError(code) from e

        return redirect.target
