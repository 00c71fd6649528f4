"""Unit tests for the RedisKeySchema class in redis_key_schema.py.

Test coverage includes:

1. Redirect key generation
   - Ensures redirect_key() generates correct Redis keys for a given shortcode.

2. Prefix behavior
   - Confirms keys are not prefixed when no prefix is provided.
   - Confirms keys are correctly prefixed when a valid prefix is provided.

3. Invalid prefix types
   - Ensures improper prefix types raise TypeError.
"""

import pytest

from shorter.dao.redis.redis_key_schema import RedisKeySchema


# -------------------------------
# 1. Redirect key generation
# -------------------------------


@pytest.mark.parametrize(
    'shortcode, expected',
    [
        ('abc123', 'redirects:abc123'),
        ('XyZ789', 'redirects:XyZ789'),
    ],
)
def test_redirect_key(shortcode, expected):
    """Ensure redirect_key() generates valid Redis keys."""
    assert RedisKeySchema().redirect_key(shortcode) == expected


# -------------------------------
# 2. Prefix behavior
# -------------------------------


def test_redirect_key_with_prefix():
    """Ensure the prefix namespaces every key."""
    keys = RedisKeySchema(prefix='shorter:prod')
    assert keys.redirect_key('abc123') == 'shorter:prod:redirects:abc123'


# -------------------------------
# 3. Invalid prefix types
# -------------------------------


@pytest.mark.parametrize('prefix', [123, 12.5, ['shorter'], {'app': 'shorter'}])
def test_invalid_prefix_type(prefix):
    """Ensure non-string prefixes raise TypeError."""
    with pytest.raises(TypeError):
        RedisKeySchema(prefix=prefix)
