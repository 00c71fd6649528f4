"""RPC adapter over the shorter service

Requests are JSON documents carried in the HTTP body:

    {"method": "Shorter.Post", "params": {"url": "https://example.com"}, "id": 1}
    {"method": "Shorter.Get", "params": {"code": "Gh71WPT"}, "id": 2}

Responses always use HTTP 200 and carry either a typed result or a typed error:

    {"id": 1, "result": {"url": "http://localhost/Gh71WPT", "shortcode": "Gh71WPT", "target_url": "https://example.com"}}
    {"id": 2, "result": {"url": "https://example.com"}}
    {"id": 2, "error": {"code": "NOT_FOUND", "message": "...", "error_code": "app:code_not_found_error"}}
"""

import json
import logging
from typing import Any

from shorter.bootstrap import get_service
from shorter.types import HandlerContext, HandlerEvent, HandlerResponse
from shorter.utils.helpers import guarantee_500_response, json_response
from shorter.handlers.helpers import HANDLED_ERRORS, caller_of, error_status
from shorter.handlers.rpc.constants import (
    CALL_FAILED,
    CALL_SUCCESS,
    INVALID_REQUEST,
    METHOD_ALIASES,
    UNKNOWN_METHOD,
)


logger = logging.getLogger(__name__)


class InvalidRPCRequest(Exception):
    def __init__(self, message: str, status: str = 'INVALID_ARGUMENT', error_code: str = INVALID_REQUEST):
        self.status = status
        self.error_code = error_code
        super().__init__(message)


def rpc_result(request_id: Any, result: dict[str, Any]) -> HandlerResponse:
    return json_response(200, {'id': request_id, 'result': result})


def rpc_error(request_id: Any, status: str, message: str, error_code: str | None) -> HandlerResponse:
    return json_response(200, {'id': request_id, 'error': {'code': status, 'message': message, 'error_code': error_code}})


def load_request(event: HandlerEvent) -> dict[str, Any]:
    try:
        request = json.loads(event.get('body') or '{}')
    except json.JSONDecodeError as e:
        raise InvalidRPCRequest('Invalid JSON body.') from e
    if not isinstance(request, dict):
        raise InvalidRPCRequest('Request must be a JSON object.')
    return request


def parse_call(request: dict[str, Any]) -> tuple[str, dict[str, Any]]:
    """Return (canonical method, params) of an RPC request

    Raises:
        InvalidRPCRequest:
            If the method is unknown or params is not an object.
    """
    method_name = request.get('method')
    method = METHOD_ALIASES.get(method_name) if isinstance(method_name, str) else None
    if method is None:
        raise InvalidRPCRequest(f'Unknown method {method_name!r}.', status='UNIMPLEMENTED', error_code=UNKNOWN_METHOD)

    params = request.get('params') or {}
    if not isinstance(params, dict):
        raise InvalidRPCRequest("'params' must be a JSON object.")
    return method, params


def dispatch(method: str, params: dict[str, Any], caller: str) -> dict[str, Any]:
    service = get_service()
    match method:
        case 'Shorter.Post':
            target_url = params.get('url') or params.get('target_url')
            if not target_url:
                raise InvalidRPCRequest("Missing 'url' in params.")
            result = service.shorten(target_url, caller=caller)
            return {'url': result.short_url, 'shortcode': result.shortcode, 'target_url': result.redirect.target}
        case 'Shorter.Get':
            code = params.get('code') or params.get('shortcode')
            if not code:
                raise InvalidRPCRequest("Missing 'code' in params.")
            return {'url': service.resolve(code, caller=caller)}
        case _:
            raise InvalidRPCRequest(f'Unknown method {method!r}.', status='UNIMPLEMENTED', error_code=UNKNOWN_METHOD)


@guarantee_500_response
def handler(event: HandlerEvent, context: HandlerContext) -> HandlerResponse:
    request_id = None
    try:
        request = load_request(event)
        request_id = request.get('id')
        method, params = parse_call(request)
        result = dispatch(method, params, caller_of(event))
    except InvalidRPCRequest as e:
        logger.info('Rejected RPC request.', extra={'id': request_id, 'event': e.error_code})
        return rpc_error(request_id, e.status, str(e), e.error_code)
    except HANDLED_ERRORS as e:
        status = error_status(e)
        logger.info('RPC call failed.', extra={'id': request_id, 'event': CALL_FAILED, 'status': status.rpc})
        return rpc_error(request_id, status.rpc, str(e), e.error_code)

    logger.info('RPC call succeeded.', extra={'id': request_id, 'method': method, 'event': CALL_SUCCESS})
    return rpc_result(request_id, result)
