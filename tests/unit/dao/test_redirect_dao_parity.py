"""Correctness suite shared by every Redirect DAO variant

Each test runs against the memory, Redis and MongoDB DAOs (the latter two
over in-test fakes of their client libraries, see tests/unit/conftest.py).

Test coverage includes:

1. Round trip
   - Ensures an inserted redirect is returned by get() with identical fields.
   - Ensures an expiry hint survives the round trip.

2. Atomic create-if-absent
   - Ensures a second insert of the same shortcode raises ShortURLAlreadyExistsError
     and keeps the first target.
   - Ensures concurrent inserts of the same shortcode yield exactly one winner.

3. Lookups
   - Ensures unknown shortcodes raise ShortURLNotFoundError.
   - Ensures lookups are case sensitive.

4. Time budget
   - Ensures a spent budget raises DataStoreTimeoutError without touching storage.
"""

from concurrent.futures import ThreadPoolExecutor
from datetime import datetime, timedelta, UTC

import pytest

from shorter.models import RedirectModel
from shorter.dao.exceptions import DataStoreTimeoutError, ShortURLAlreadyExistsError, ShortURLNotFoundError


# -------------------------------
# 1. Round trip
# -------------------------------


def test_insert_then_get_returns_same_redirect(any_dao, redirect):
    """Ensure get() returns exactly what insert() stored."""
    any_dao.insert(redirect)
    assert any_dao.get('abc123') == redirect


def test_expiry_hint_round_trip(any_dao, target_url):
    """Ensure expires_at is stored and returned unchanged."""
    created_at = datetime(2026, 10, 18, tzinfo=UTC)
    redirect = RedirectModel(shortcode='exp1', target=target_url, created_at=created_at, expires_at=created_at + timedelta(days=365))

    any_dao.insert(redirect)
    assert any_dao.get('exp1').expires_at == created_at + timedelta(days=365)


# -------------------------------
# 2. Atomic create-if-absent
# -------------------------------


def test_duplicate_insert_is_rejected(any_dao, redirect):
    """Ensure the first writer wins and the duplicate is reported."""
    any_dao.insert(redirect)
    with pytest.raises(ShortURLAlreadyExistsError):
        any_dao.insert(RedirectModel(shortcode='abc123', target='https://other.example.com'))

    assert any_dao.get('abc123').target == redirect.target


def test_concurrent_duplicate_inserts_have_one_winner(any_dao):
    """Ensure exactly one of many concurrent inserts of one shortcode succeeds."""

    def insert(i):
        try:
            any_dao.insert(RedirectModel(shortcode='race', target=f'https://example.com/{i}'))
        except ShortURLAlreadyExistsError:
            return False
        return True

    with ThreadPoolExecutor(max_workers=8) as executor:
        outcomes = list(executor.map(insert, range(32)))

    assert outcomes.count(True) == 1
    winner = outcomes.index(True)
    assert any_dao.get('race').target == f'https://example.com/{winner}'


# -------------------------------
# 3. Lookups
# -------------------------------


def test_get_unknown_shortcode_raises(any_dao):
    """Ensure unknown shortcodes raise ShortURLNotFoundError."""
    with pytest.raises(ShortURLNotFoundError):
        any_dao.get('nope42')


def test_get_is_case_sensitive(any_dao, redirect):
    """Ensure 'abc123' and 'ABC123' are distinct codes."""
    any_dao.insert(redirect)
    with pytest.raises(ShortURLNotFoundError):
        any_dao.get('ABC123')


# -------------------------------
# 4. Time budget
# -------------------------------


@pytest.mark.parametrize('timeout', [0, -1.5])
def test_spent_budget_raises_timeout(any_dao, redirect, timeout):
    """Ensure a spent budget aborts before the data store is reached."""
    with pytest.raises(DataStoreTimeoutError):
        any_dao.insert(redirect, timeout=timeout)
    with pytest.raises(DataStoreTimeoutError):
        any_dao.get('abc123', timeout=timeout)


def test_positive_budget_is_accepted(any_dao, redirect):
    """Ensure a remaining budget lets the call through."""
    any_dao.insert(redirect, timeout=5)
    assert any_dao.get('abc123', timeout=5.0).target == redirect.target
