import string
from enum import StrEnum


class Defaults:
    """Default values for the configuration surface."""

    ALPHABET = string.ascii_lowercase + string.ascii_uppercase + string.digits
    MAX_LENGTH = -1  # non-positive: variable length sequence codes
    MAX_ATTEMPTS = 5
    SHORT_URI = 'http://localhost'
    RATE_BUCKET = 10
    RATE_REFILL = 1.0  # tokens per second
    MONGO_URI = 'mongodb://localhost:27017'
    MONGO_DATABASE = 'shorter'
    MONGO_COLLECTION = 'redirect'
    MONGO_TIMEOUT = 60  # seconds
    REDIS_HOSTS = 'localhost:6379'
    REDIS_PREFIX = 'shorter'
    REDIS_SOCKET_TIMEOUT = 5  # seconds; used when neither socket_timeout nor request_timeout is set
    MAX_URL_LENGTH = 2048
    MAX_CODE_LENGTH = 64


class Backend(StrEnum):
    MONGO = 'mongo'
    REDIS = 'redis'
    MEMORY = 'memory'


class RedisDrive(StrEnum):
    SINGLE = 'single'
    CLUSTER = 'cluster'


class ENV:
    """Environment variable names."""

    class App(StrEnum):
        APP_ENV = 'APP_ENV'
        APP_NAME = 'APP_NAME'
        PROJECT_ROOT = 'PROJECT_ROOT'
        CONFIG_PATH = 'SHORTER_CONFIG'
        LOG_LEVEL = 'LOG_LEVEL'
        LOG_PATH = 'LOG_PATH'

    class Storage(StrEnum):
        DB_DRIVE = 'DB_DRIVE'
        MONGO_ADDR = 'MONGO_ADDR'
        MONGO_DATABASE = 'MONGO_DATABASE'
        REDIS_DRIVE = 'REDIS_DRIVE'
        REDIS_HOSTS = 'REDIS_HOSTS'
        REDIS_PASSWORD = 'REDIS_PASSWORD'  # noqa: S105
        REDIS_DB = 'REDIS_DB'

    class Shortener(StrEnum):
        SHORT_URI = 'SHORT_URI'
        ALPHABET = 'ALPHABET'
        MAX_LENGTH = 'MAX_LENGTH'
        RATE_BUCKET = 'RATE_BUCKET'


# Error codes
UNKNOWN_INTERNAL_SERVER_ERROR = 'UNKNOWN_INTERNAL_SERVER_ERROR'
