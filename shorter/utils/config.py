"""Utility functions for application configuration management.

Configuration is read once at process start and frozen into a
`ShorterConfig` instance that is passed to the components which need it.
No core module reads the process environment itself.

Sources, later ones win:

    1. Built-in defaults (see shorter.constants.Defaults).
    2. A YAML document, looked up as:
           - the `path` argument, else
           - $SHORTER_CONFIG, else
           - <project root>/config/<APP_ENV>.yml
       A missing file is not an error.
    3. Environment variable overrides (DB_DRIVE, MONGO_ADDR, REDIS_HOSTS, ...).

The YAML document follows this structure:

    active_backend: redis
    short_uri: https://s.example.com
    shortcode:
      alphabet: abcdefghijklmnopqrstuvwxyzABCDEFGHIJKLMNOPQRSTUVWXYZ0123456789
      max_length: -1
      max_attempts: 5
      salt: change-me
      ttl: null
    rate_limit:
      bucket: 10
      refill_per_second: 1.0
    request_timeout: 5
    logging:
      level: INFO
      path: null
    configs:
      mongo: { uri: ..., database: shorter, collection: redirect, timeout: 60 }
      redis: { drive: single, hosts: "localhost:6379", db: 0, password: null, prefix: null }

Functions:
    app_env() -> str
    app_name() -> str | None
    app_prefix() -> str | None
    project_root() -> Path
    load_config(path: str | Path | None = None) -> ShorterConfig

Example:
    >>> from shorter.utils.config import load_config
    >>> config = load_config()
    >>> config.backend
    'mongo'
"""

import os
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import yaml

from shorter.constants import ENV, Backend, Defaults, RedisDrive
from shorter.exceptions import BadConfigurationError
from shorter.types import RawConfig


logger = logging.getLogger(__name__)


def app_env() -> str:
    """Return the current application environment by reading 'APP_ENV' ('local' by default)"""
    return os.environ.get(ENV.App.APP_ENV, 'local').lower()


def app_name() -> str | None:
    """Return the current application name by reading 'APP_NAME', None if not set"""
    return os.environ.get(ENV.App.APP_NAME)


def project_root() -> Path:
    """Return the absolute path to the project root directory

    Uses the PROJECT_ROOT environment variable, falling back to the
    directory that contains the `shorter` package.
    """
    return Path(os.environ.get(ENV.App.PROJECT_ROOT, Path(__file__).resolve().parents[2]))


def app_prefix() -> str | None:
    """Return application prefix for DAOs

    Returns:
        str: app prefix as <app name>:<app env>.
             None if APP_NAME is not set.

    Example:
        >>> os.environ['APP_NAME'] = 'shorter'
        >>> os.environ['APP_ENV'] = 'local'
        >>> app_prefix()
        'shorter:local'
    """
    return None if app_name() is None else f'{app_name()}:{app_env()}'


@dataclass(frozen=True)
class MongoConfig:
    uri: str = Defaults.MONGO_URI
    database: str = Defaults.MONGO_DATABASE
    collection: str = Defaults.MONGO_COLLECTION
    timeout: float = Defaults.MONGO_TIMEOUT


@dataclass(frozen=True)
class RedisConfig:
    drive: str = RedisDrive.SINGLE
    hosts: str = Defaults.REDIS_HOSTS
    db: int = 0
    username: str | None = None
    password: str | None = None
    socket_timeout: float | None = None
    prefix: str | None = Defaults.REDIS_PREFIX


@dataclass(frozen=True)
class ShortcodeConfig:
    alphabet: str = Defaults.ALPHABET
    max_length: int | None = Defaults.MAX_LENGTH  # non-positive or None: variable length
    max_attempts: int = Defaults.MAX_ATTEMPTS
    salt: str | None = None
    ttl: int | None = None  # seconds; handed to storage as an expiry hint


@dataclass(frozen=True)
class RateLimitConfig:
    bucket: int = Defaults.RATE_BUCKET
    refill_per_second: float = Defaults.RATE_REFILL


@dataclass(frozen=True)
class ShorterConfig:
    """Immutable process configuration"""

    backend: str = Backend.MONGO
    short_uri: str = Defaults.SHORT_URI
    request_timeout: float | None = None
    log_level: str = 'INFO'
    log_path: str | None = None
    shortcode: ShortcodeConfig = field(default_factory=ShortcodeConfig)
    rate_limit: RateLimitConfig = field(default_factory=RateLimitConfig)
    mongo: MongoConfig = field(default_factory=MongoConfig)
    redis: RedisConfig = field(default_factory=RedisConfig)


def config_path() -> Path:
    """Return the YAML document location used when none is given explicitly"""
    explicit = os.environ.get(ENV.App.CONFIG_PATH)
    if explicit:
        return Path(explicit)
    return project_root() / 'config' / f'{app_env()}.yml'


def _read_yaml(path: Path) -> RawConfig:
    if not path.is_file():
        logger.debug('No configuration file found, using defaults.', extra={'configPath': str(path)})
        return {}

    with path.open(encoding='utf-8') as f:
        data = yaml.safe_load(f) or {}
    if not isinstance(data, dict):
        raise BadConfigurationError(f'Configuration file {path} must contain a mapping at the top level.')
    return data


def _section(raw: RawConfig, *keys: str) -> RawConfig:
    section = raw
    for key in keys:
        section = section.get(key) or {}
        if not isinstance(section, dict):
            raise BadConfigurationError(f"Configuration section '{'.'.join(keys)}' must be a mapping.")
    return section


def _number(name: str, value: Any, kind: type, optional: bool = False) -> Any:
    if value is None or value == '':
        if optional:
            return None
        raise BadConfigurationError(f"Configuration value '{name}' is required.")
    try:
        return kind(value)
    except (TypeError, ValueError) as e:
        raise BadConfigurationError(f"Configuration value '{name}' must be {kind.__name__} (given value: {value!r}).") from e


def _env_overrides() -> RawConfig:
    """Map the environment variable surface onto the YAML document structure"""
    env = os.environ
    overrides: RawConfig = {}

    def put(value: str | None, *keys: str) -> None:
        if value is None or value == '':
            return
        section = overrides
        for key in keys[:-1]:
            section = section.setdefault(key, {})
        section[keys[-1]] = value

    put(env.get(ENV.Storage.DB_DRIVE), 'active_backend')
    put(env.get(ENV.Storage.MONGO_ADDR), 'configs', 'mongo', 'uri')
    put(env.get(ENV.Storage.MONGO_DATABASE), 'configs', 'mongo', 'database')
    put(env.get(ENV.Storage.REDIS_DRIVE), 'configs', 'redis', 'drive')
    put(env.get(ENV.Storage.REDIS_HOSTS), 'configs', 'redis', 'hosts')
    put(env.get(ENV.Storage.REDIS_PASSWORD), 'configs', 'redis', 'password')
    put(env.get(ENV.Storage.REDIS_DB), 'configs', 'redis', 'db')
    put(env.get(ENV.Shortener.SHORT_URI), 'short_uri')
    put(env.get(ENV.Shortener.ALPHABET), 'shortcode', 'alphabet')
    put(env.get(ENV.Shortener.MAX_LENGTH), 'shortcode', 'max_length')
    put(env.get(ENV.Shortener.RATE_BUCKET), 'rate_limit', 'bucket')
    put(env.get(ENV.App.LOG_LEVEL), 'logging', 'level')
    put(env.get(ENV.App.LOG_PATH), 'logging', 'path')
    return overrides


def _merge(base: RawConfig, overrides: RawConfig) -> RawConfig:
    merged = dict(base)
    for key, value in overrides.items():
        if isinstance(value, dict) and isinstance(merged.get(key), dict):
            merged[key] = _merge(merged[key], value)
        else:
            merged[key] = value
    return merged


def parse_config(raw: RawConfig) -> ShorterConfig:
    """Validate a raw configuration document and freeze it into a ShorterConfig

    Raises:
        BadConfigurationError:
            If a value is missing, has the wrong type or is out of range.
    """
    backend = str(raw.get('active_backend', Backend.MONGO)).lower()
    if backend not in {b.value for b in Backend}:
        raise BadConfigurationError(f"Unknown storage backend {backend!r} (expected one of: {', '.join(Backend)}).")

    shortcode_raw = _section(raw, 'shortcode')
    alphabet = str(shortcode_raw.get('alphabet') or Defaults.ALPHABET)
    if len(set(alphabet)) < 2 or len(set(alphabet)) != len(alphabet):
        raise BadConfigurationError(f'Alphabet must contain at least 2 distinct, non-repeated symbols (given value: {alphabet!r}).')
    shortcode = ShortcodeConfig(
        alphabet=alphabet,
        max_length=_number('shortcode.max_length', shortcode_raw.get('max_length', Defaults.MAX_LENGTH), int, optional=True),
        max_attempts=_number('shortcode.max_attempts', shortcode_raw.get('max_attempts', Defaults.MAX_ATTEMPTS), int),
        salt=shortcode_raw.get('salt'),
        ttl=_number('shortcode.ttl', shortcode_raw.get('ttl'), int, optional=True),
    )
    if shortcode.max_length is not None and shortcode.max_length > Defaults.MAX_CODE_LENGTH:
        raise BadConfigurationError(
            f'shortcode.max_length must be at most {Defaults.MAX_CODE_LENGTH}, the longest resolvable code (given value: {shortcode.max_length}).'
        )
    if shortcode.salt is not None and (not isinstance(shortcode.salt, str) or not shortcode.salt):
        raise BadConfigurationError(f'shortcode.salt must be a non-empty string (given value: {shortcode.salt!r}).')
    if shortcode.max_attempts < 1:
        raise BadConfigurationError(f'shortcode.max_attempts must be at least 1 (given value: {shortcode.max_attempts}).')
    if shortcode.ttl is not None and shortcode.ttl < 1:
        raise BadConfigurationError(f'shortcode.ttl must be a positive number of seconds (given value: {shortcode.ttl}).')

    rate_raw = _section(raw, 'rate_limit')
    rate_limit = RateLimitConfig(
        bucket=_number('rate_limit.bucket', rate_raw.get('bucket', Defaults.RATE_BUCKET), int),
        refill_per_second=_number('rate_limit.refill_per_second', rate_raw.get('refill_per_second', Defaults.RATE_REFILL), float),
    )
    if rate_limit.bucket < 1 or rate_limit.refill_per_second <= 0:
        raise BadConfigurationError('rate_limit.bucket must be at least 1 and rate_limit.refill_per_second positive.')

    mongo_raw = _section(raw, 'configs', 'mongo')
    mongo = MongoConfig(
        uri=str(mongo_raw.get('uri', Defaults.MONGO_URI)),
        database=str(mongo_raw.get('database', Defaults.MONGO_DATABASE)),
        collection=str(mongo_raw.get('collection', Defaults.MONGO_COLLECTION)),
        timeout=_number('configs.mongo.timeout', mongo_raw.get('timeout', Defaults.MONGO_TIMEOUT), float),
    )

    redis_raw = _section(raw, 'configs', 'redis')
    drive = str(redis_raw.get('drive', RedisDrive.SINGLE)).lower()
    if drive not in {d.value for d in RedisDrive}:
        raise BadConfigurationError(f"Unknown Redis drive {drive!r} (expected one of: {', '.join(RedisDrive)}).")
    redis = RedisConfig(
        drive=drive,
        hosts=str(redis_raw.get('hosts', Defaults.REDIS_HOSTS)),
        db=_number('configs.redis.db', redis_raw.get('db', 0), int),
        username=redis_raw.get('username'),
        password=redis_raw.get('password'),
        socket_timeout=_number('configs.redis.socket_timeout', redis_raw.get('socket_timeout'), float, optional=True),
        prefix=redis_raw.get('prefix') or app_prefix() or Defaults.REDIS_PREFIX,
    )

    logging_raw = _section(raw, 'logging')
    return ShorterConfig(
        backend=backend,
        short_uri=str(raw.get('short_uri') or Defaults.SHORT_URI),
        request_timeout=_number('request_timeout', raw.get('request_timeout'), float, optional=True),
        log_level=str(logging_raw.get('level') or 'INFO').upper(),
        log_path=logging_raw.get('path'),
        shortcode=shortcode,
        rate_limit=rate_limit,
        mongo=mongo,
        redis=redis,
    )


def load_config(path: str | Path | None = None) -> ShorterConfig:
    """Load the process configuration from YAML and the environment

    Args:
        path (str | Path | None):
            Explicit YAML document location. See module docstring for the
            lookup order when omitted.

    Returns:
        ShorterConfig: frozen configuration.

    Raises:
        BadConfigurationError:
            If the document or an override is invalid.
    """
    location = Path(path) if path is not None else config_path()
    raw = _merge(_read_yaml(location), _env_overrides())
    config = parse_config(raw)
    logger.debug('Loaded configuration.', extra={'configPath': str(location), 'backend': config.backend})
    return config
