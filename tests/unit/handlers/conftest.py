from unittest.mock import MagicMock

import pytest

from shorter.bootstrap import build_service
from shorter.dao.memory import RedirectMemoryDAO
from shorter.services.base import BaseShorterService
from shorter.utils.config import RateLimitConfig, ShortcodeConfig, ShorterConfig


@pytest.fixture
def context():
    class _Context:
        function_name = 'shorter'

    return _Context()


@pytest.fixture
def source_ip():
    return '203.0.113.7'


@pytest.fixture
def shorter_config():
    return ShorterConfig(
        backend='memory',
        short_uri='https://s.example.com',
        shortcode=ShortcodeConfig(salt='handler_tests'),
        rate_limit=RateLimitConfig(bucket=3, refill_per_second=0.001),
    )


@pytest.fixture
def memory_dao():
    return RedirectMemoryDAO()


@pytest.fixture
def real_service(shorter_config, memory_dao):
    """Full service graph (middleware included) over an in-memory store."""
    return build_service(shorter_config, dao=memory_dao)


@pytest.fixture
def mock_service():
    return MagicMock(spec=BaseShorterService)
