"""Application-wide logging initialization

IMPORTANT: Call `initialize_logging()` once at process start, before any
other logging is done (shorter.bootstrap.get_service() does this).

Logging format:
{
    "timestamp": "2026-10-18T12:00:00.000Z",
    "level": "INFO",
    "logger": "shorter.services.shorten",
    "message": "Shortened URL.",
    "shortcode": "Gh71WPT"
}
"""

import os
import json
import logging
import logging.config
from datetime import datetime, UTC

from shorter.constants import ENV


class JsonFormatter(logging.Formatter):
    """JSON formatter that includes LogRecord extras"""

    STANDARD_ATTRS = frozenset(
        {
            'args',
            'asctime',
            'created',
            'exc_info',
            'exc_text',
            'filename',
            'funcName',
            'levelname',
            'levelno',
            'lineno',
            'module',
            'msecs',
            'msg',
            'name',
            'pathname',
            'process',
            'processName',
            'relativeCreated',
            'stack_info',
            'thread',
            'threadName',
            'taskName',
        }
    )

    def format(self, record: logging.LogRecord) -> str:
        # fmt: off
        timestamp = datetime.fromtimestamp(record.created, tz=UTC) \
                            .isoformat(timespec="milliseconds") \
                            .replace("+00:00", "Z")
        # fmt: on

        log = {
            'timestamp': timestamp,
            'level': record.levelname,
            'logger': record.name,
            'message': record.getMessage(),
        }

        if record.exc_info:
            log['exception'] = self.formatException(record.exc_info)

        # Attach `extra` fields
        for key, value in record.__dict__.items():
            if key not in self.STANDARD_ATTRS and key not in log:
                log[key] = value

        return json.dumps(log, default=str)


def initialize_logging(level: str | None = None, log_path: str | None = None) -> None:
    """Configure the root logger with JSON output

    Args:
        level (str | None):
            Log level name. Falls back to $LOG_LEVEL, then INFO.
        log_path (str | None):
            Optional file that receives the same JSON lines as stdout.
    """
    log_level = (level or os.getenv(ENV.App.LOG_LEVEL, 'INFO')).upper()
    handlers = {
        'stdout': {
            'class': 'logging.StreamHandler',
            'formatter': 'json',
            'stream': 'ext://sys.stdout',
        }
    }
    if log_path:
        handlers['file'] = {
            'class': 'logging.FileHandler',
            'formatter': 'json',
            'filename': log_path,
            'encoding': 'utf-8',
        }

    logging.config.dictConfig(
        {
            'version': 1,
            'disable_existing_loggers': False,
            'formatters': {
                'json': {
                    '()': JsonFormatter,
                }
            },
            'handlers': handlers,
            'root': {
                'level': log_level,
                'handlers': list(handlers),
            },
        }
    )
