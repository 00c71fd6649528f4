"""Mapping of shorter errors onto transport responses.

Functions:
    caller_of(event) -> str
        Rate-limiting key for a request (source IP, else 'anonymous')
    error_status(error) -> ErrorStatus
        HTTP status and RPC status name for an error
    error_response(error) -> dict
        JSON error response for the HTTP handlers
"""

import math
from dataclasses import dataclass
from typing import Any

from shorter.dao.exceptions import DataStoreError, DataStoreTimeoutError
from shorter.exceptions import (
    CodeNotFoundError,
    GenerationExhaustedError,
    InvalidURLError,
    RateLimitExceededError,
    RequestCancelledError,
)
from shorter.middleware.rate_limit import ANONYMOUS_CALLER
from shorter.types import HandlerEvent, HandlerResponse
from shorter.utils.helpers import json_response


@dataclass(frozen=True)
class ErrorStatus:
    http: int
    rpc: str


# Order matters: DataStoreTimeoutError is a DataStoreError
ERROR_STATUSES: tuple[tuple[type[Exception], ErrorStatus], ...] = (
    (InvalidURLError, ErrorStatus(400, 'INVALID_ARGUMENT')),
    (CodeNotFoundError, ErrorStatus(404, 'NOT_FOUND')),
    (RateLimitExceededError, ErrorStatus(429, 'RESOURCE_EXHAUSTED')),
    (GenerationExhaustedError, ErrorStatus(500, 'INTERNAL')),
    (RequestCancelledError, ErrorStatus(504, 'DEADLINE_EXCEEDED')),
    (DataStoreTimeoutError, ErrorStatus(504, 'DEADLINE_EXCEEDED')),
    (DataStoreError, ErrorStatus(503, 'UNAVAILABLE')),
)

# Errors with a known transport mapping; anything else is left to guarantee_500_response
HANDLED_ERRORS = tuple(error_cls for error_cls, _ in ERROR_STATUSES)


def caller_of(event: HandlerEvent) -> str:
    identity = (event.get('requestContext') or {}).get('identity') or {}
    return identity.get('sourceIp') or ANONYMOUS_CALLER


def error_status(error: Exception) -> ErrorStatus:
    for error_cls, status in ERROR_STATUSES:
        if isinstance(error, error_cls):
            return status
    return ErrorStatus(500, 'INTERNAL')


def error_response(error: Exception) -> HandlerResponse:
    status = error_status(error)
    body: dict[str, Any] = {
        'code': status.http,
        'message': str(error),
        'error_code': getattr(error, 'error_code', None),
    }

    headers = {}
    if isinstance(error, RateLimitExceededError):
        headers['Retry-After'] = str(max(1, math.ceil(error.retry_after)))
    return json_response(status.http, body, headers=headers)


def bad_request(message: str, error_code: str) -> HandlerResponse:
    return json_response(400, {'code': 400, 'message': f'Bad Request ({message})', 'error_code': error_code})
