"""Runtime utilities

Functions:
    running_locally() -> bool:
        True if the application runs in a local development environment.

Example:
    >>> from shorter.utils.runtime import running_locally
    >>> os.environ['APP_ENV'] = 'local'
    >>> running_locally()
    True
    >>> os.environ['APP_ENV'] = 'prod'
    >>> running_locally()
    False
"""

import os

from shorter.constants import ENV


def running_locally() -> bool:
    """Check if the application runs locally (APP_ENV=local; unset means deployed)"""
    return os.getenv(ENV.App.APP_ENV, '').lower() == 'local'
