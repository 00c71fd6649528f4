from dataclasses import dataclass, field
from datetime import datetime, UTC


def _utcnow() -> datetime:
    return datetime.now(UTC)


# fmt: off
@dataclass(frozen=True)
class RedirectModel:
    shortcode: str                                          # Unique short identifier of the redirect
    target: str                                             # Original long URL
    created_at: datetime = field(default_factory=_utcnow)   # Creation moment (UTC), never changes
    expires_at: datetime | None = None                      # Advisory expiry handed to storage as a TTL hint
# fmt: on
