"""Unit tests for configuration utilities in config.py

Test coverage includes:

1. Environment variable resolution
   - Ensures app_env(), app_name(), app_prefix() correctly read environment variables.

2. Project root and config path resolution
   - Ensures project_root() reads PROJECT_ROOT from environment variables.
   - Ensures config_path() prefers SHORTER_CONFIG, else <root>/config/<env>.yml.

3. Configuration loading behavior
   - Ensures load_config() returns defaults when no file exists.
   - Ensures YAML values are parsed into frozen dataclasses.
   - Ensures environment variables override YAML values.

4. Validation
   - Ensures invalid values raise BadConfigurationError.
"""

import dataclasses
from pathlib import Path

import pytest

from shorter.constants import Defaults
from shorter.exceptions import BadConfigurationError
from shorter.utils import config


# -------------------------------
# Fixtures
# -------------------------------


@pytest.fixture
def config_file(tmp_path) -> Path:
    path = tmp_path / 'shorter.yml'
    path.write_text(
        """
active_backend: redis
short_uri: https://s.example.com/
shortcode:
  alphabet: abcdef0123
  max_length: 8
  max_attempts: 3
  salt: pepper
  ttl: 3600
rate_limit:
  bucket: 20
  refill_per_second: 2.5
request_timeout: 1.5
logging:
  level: debug
  path: /tmp/shorter.log
configs:
  mongo:
    uri: mongodb://mongo.test:27017
    database: links
    collection: redirects
    timeout: 5
  redis:
    drive: cluster
    hosts: "redis-1:7000;redis-2:7001"
    db: 0
    password: secret
    prefix: shorter:test
""",
        encoding='utf-8',
    )
    return path


# -------------------------------
# 1. Environment variable resolution
# -------------------------------


def test_app_env_defaults_to_local():
    assert config.app_env() == 'local'


def test_app_env_and_name(monkeypatch):
    monkeypatch.setenv('APP_ENV', 'Prod')
    monkeypatch.setenv('APP_NAME', 'shorter')

    assert config.app_env() == 'prod'
    assert config.app_name() == 'shorter'
    assert config.app_prefix() == 'shorter:prod'


def test_app_prefix_without_name():
    assert config.app_prefix() is None


# -------------------------------
# 2. Project root and config path resolution
# -------------------------------


def test_project_root_from_env(monkeypatch, tmp_path):
    monkeypatch.setenv('PROJECT_ROOT', str(tmp_path))
    assert config.project_root() == tmp_path


def test_project_root_default_contains_package():
    assert (config.project_root() / 'shorter').is_dir()


def test_config_path_from_env(monkeypatch, config_file):
    monkeypatch.setenv('SHORTER_CONFIG', str(config_file))
    assert config.config_path() == config_file


def test_config_path_per_environment(monkeypatch, tmp_path):
    monkeypatch.setenv('PROJECT_ROOT', str(tmp_path))
    monkeypatch.setenv('APP_ENV', 'staging')
    assert config.config_path() == tmp_path / 'config' / 'staging.yml'


# -------------------------------
# 3. Configuration loading behavior
# -------------------------------


def test_load_config_defaults_when_file_missing(tmp_path):
    result = config.load_config(tmp_path / 'missing.yml')

    assert result.backend == 'mongo'
    assert result.short_uri == Defaults.SHORT_URI
    assert result.shortcode.alphabet == Defaults.ALPHABET
    assert result.shortcode.max_attempts == 5
    assert result.rate_limit.bucket == 10
    assert result.redis.prefix == 'shorter'
    assert result.request_timeout is None


def test_load_config_from_yaml(config_file):
    result = config.load_config(config_file)

    assert result.backend == 'redis'
    assert result.short_uri == 'https://s.example.com/'
    assert result.shortcode == config.ShortcodeConfig(alphabet='abcdef0123', max_length=8, max_attempts=3, salt='pepper', ttl=3600)
    assert result.rate_limit == config.RateLimitConfig(bucket=20, refill_per_second=2.5)
    assert result.request_timeout == 1.5
    assert result.log_level == 'DEBUG'
    assert result.log_path == '/tmp/shorter.log'
    assert result.mongo == config.MongoConfig(uri='mongodb://mongo.test:27017', database='links', collection='redirects', timeout=5.0)
    assert result.redis.drive == 'cluster'
    assert result.redis.hosts == 'redis-1:7000;redis-2:7001'
    assert result.redis.password == 'secret'
    assert result.redis.prefix == 'shorter:test'


def test_load_config_env_overrides(monkeypatch, config_file):
    monkeypatch.setenv('DB_DRIVE', 'MONGO')
    monkeypatch.setenv('MONGO_ADDR', 'mongodb://override:27017')
    monkeypatch.setenv('REDIS_HOSTS', 'redis-override:6379')
    monkeypatch.setenv('REDIS_DB', '3')
    monkeypatch.setenv('SHORT_URI', 'https://sho.rt')
    monkeypatch.setenv('MAX_LENGTH', '-1')
    monkeypatch.setenv('RATE_BUCKET', '50')
    monkeypatch.setenv('LOG_LEVEL', 'warning')

    result = config.load_config(config_file)

    assert result.backend == 'mongo'
    assert result.mongo.uri == 'mongodb://override:27017'
    assert result.mongo.database == 'links'  # untouched keys survive the merge
    assert result.redis.hosts == 'redis-override:6379'
    assert result.redis.db == 3
    assert result.short_uri == 'https://sho.rt'
    assert result.shortcode.max_length == -1
    assert result.shortcode.alphabet == 'abcdef0123'
    assert result.rate_limit.bucket == 50
    assert result.log_level == 'WARNING'


def test_load_config_uses_app_prefix_for_redis(monkeypatch, tmp_path):
    monkeypatch.setenv('APP_NAME', 'shorter')
    monkeypatch.setenv('APP_ENV', 'dev')
    assert config.load_config(tmp_path / 'missing.yml').redis.prefix == 'shorter:dev'


def test_config_is_frozen(tmp_path):
    result = config.load_config(tmp_path / 'missing.yml')
    with pytest.raises(dataclasses.FrozenInstanceError):
        result.backend = 'redis'


# -------------------------------
# 4. Validation
# -------------------------------


@pytest.mark.parametrize(
    'raw',
    [
        {'active_backend': 'postgres'},
        {'configs': {'redis': {'drive': 'sentinel'}}},
        {'configs': {'redis': {'db': 'zero'}}},
        {'shortcode': {'alphabet': 'a'}},
        {'shortcode': {'alphabet': 'abca'}},
        {'shortcode': {'max_attempts': 0}},
        {'shortcode': {'max_length': 'long'}},
        {'shortcode': {'max_length': Defaults.MAX_CODE_LENGTH + 1}},
        {'shortcode': {'salt': 123}},
        {'shortcode': {'salt': ''}},
        {'shortcode': {'salt': ['a', 'b']}},
        {'shortcode': {'ttl': 0}},
        {'rate_limit': {'bucket': 0}},
        {'rate_limit': {'refill_per_second': 0}},
        {'request_timeout': 'soon'},
        {'shortcode': 'not a mapping'},
    ],
)
def test_parse_config_rejects_invalid_values(raw):
    with pytest.raises(BadConfigurationError):
        config.parse_config(raw)


def test_load_config_rejects_non_mapping_document(tmp_path):
    path = tmp_path / 'list.yml'
    path.write_text('- redis\n- mongo\n', encoding='utf-8')
    with pytest.raises(BadConfigurationError):
        config.load_config(path)


def test_invalid_env_override_raises(monkeypatch, tmp_path):
    monkeypatch.setenv('RATE_BUCKET', 'many')
    with pytest.raises(BadConfigurationError, match='rate_limit.bucket'):
        config.load_config(tmp_path / 'missing.yml')


def test_parse_config_accepts_longest_resolvable_code():
    result = config.parse_config({'shortcode': {'max_length': Defaults.MAX_CODE_LENGTH, 'salt': 'pepper'}})

    assert result.shortcode.max_length == Defaults.MAX_CODE_LENGTH
    assert result.shortcode.salt == 'pepper'


def test_numeric_yaml_salt_is_rejected(tmp_path):
    path = tmp_path / 'salt.yml'
    path.write_text('shortcode:\n  salt: 123\n', encoding='utf-8')
    with pytest.raises(BadConfigurationError, match='shortcode.salt'):
        config.load_config(path)
