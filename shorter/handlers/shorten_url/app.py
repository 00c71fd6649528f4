import json
import logging

from shorter.bootstrap import get_service
from shorter.types import HandlerContext, HandlerEvent, HandlerResponse
from shorter.utils.helpers import guarantee_500_response, json_response
from shorter.handlers.helpers import HANDLED_ERRORS, bad_request, caller_of, error_response
from shorter.handlers.shorten_url.constants import (
    INVALID_JSON_BODY,
    MISSING_TARGET_URL,
    SHORTEN_FAILED,
    SHORTEN_SUCCESS,
)


logger = logging.getLogger(__name__)


@guarantee_500_response
def handler(event: HandlerEvent, context: HandlerContext) -> HandlerResponse:
    """Handle incoming HTTP requests to shorten URLs

    This handler follows this procedure to shorten URLs:
    - Step 1: Extract the target URL from the JSON request body
    - Step 2: Shorten it through the shorter service
    - Step 3: Respond with the new short link

    HTTP responses:
        200: Successful URL shortening
            data.url: newly generated short url
            data.shortcode: newly generated shortcode
            data.target_url: original url (provided in request)
        400: Bad client request (invalid JSON, missing or invalid URL)
        429: Too many requests from this caller (Retry-After header set)
        500: Shortcode space exhausted or unexpected failure
        503: Data store unavailable
        504: Time budget exceeded

    Example:
        >>> event = {'body': '{"url": "https://example.com"}'}
        >>> response = handler(event, None)
        >>> response['statusCode']
        200
        >>> json.loads(response['body'])['data']['url']
        'http://localhost/Gh71WPT'
    """
    # 1- Extract target URL from request body
    try:
        request_body = json.loads(event.get('body') or '{}')
    except json.JSONDecodeError:
        logger.info('Invalid JSON body. Responding with 400.', extra={'event': INVALID_JSON_BODY})
        return bad_request('invalid JSON body', INVALID_JSON_BODY)

    if not isinstance(request_body, dict):
        request_body = {}
    target_url = request_body.get('url') or request_body.get('target_url')
    if not target_url:
        logger.info("Missing 'url' in JSON body. Responding with 400.", extra={'event': MISSING_TARGET_URL})
        return bad_request("missing 'url' in JSON body", MISSING_TARGET_URL)

    # 2- Shorten through the service (validation, generation, persistence)
    try:
        result = get_service().shorten(target_url, caller=caller_of(event))
    except HANDLED_ERRORS as e:
        response = error_response(e)
        logger.info(
            'Shortening failed. Responding with %s.',
            response['statusCode'],
            extra={'event': SHORTEN_FAILED, 'error_code': e.error_code},
        )
        return response

    # 3- Respond with the short link
    logger.info('Short URL created. Responding with 200.', extra={'shortcode': result.shortcode, 'event': SHORTEN_SUCCESS})
    return json_response(
        200,
        {
            'code': 200,
            'data': {
                'url': result.short_url,
                'shortcode': result.shortcode,
                'target_url': result.redirect.target,
            },
        },
    )
