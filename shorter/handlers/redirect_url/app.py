import json
import logging

from shorter.bootstrap import get_service
from shorter.types import HandlerContext, HandlerEvent, HandlerResponse
from shorter.utils.helpers import guarantee_500_response
from shorter.handlers.helpers import HANDLED_ERRORS, bad_request, caller_of, error_response
from shorter.handlers.redirect_url.constants import (
    MISSING_SHORTCODE,
    REDIRECT_FAILED,
    REDIRECT_SUCCESS,
)


logger = logging.getLogger(__name__)


def response_302(*, location: str) -> HandlerResponse:
    return {
        'statusCode': 302,
        'headers': {'Location': location},
        'body': json.dumps({}),  # no body needed for redirects
    }


@guarantee_500_response
def handler(event: HandlerEvent, context: HandlerContext) -> HandlerResponse:
    """Handle incoming HTTP requests to redirect short URLs

    HTTP responses:
        302: Successful redirect
            headers:
                Location: target URL destination
        400: Missing shortcode in path parameters
        404: Unknown shortcode
        429: Too many requests from this caller (Retry-After header set)
        503: Data store unavailable
        504: Time budget exceeded

    Example:
        >>> event = {'pathParameters': {'shortcode': 'Gh71WPT'}}
        >>> response = handler(event, None)
        >>> response['statusCode']
        302
        >>> response['headers']['Location']
        'https://example.com/my-page'
    """
    # 1- Extract shortcode from request's path
    shortcode = (event.get('pathParameters') or {}).get('shortcode')
    if not shortcode:
        logger.info('Missing "shortcode" in path. Responding with 400.', extra={'event': MISSING_SHORTCODE})
        return bad_request("missing 'shortcode' in path", MISSING_SHORTCODE)

    # 2- Resolve the shortcode to its target URL
    try:
        target_url = get_service().resolve(shortcode, caller=caller_of(event))
    except HANDLED_ERRORS as e:
        response = error_response(e)
        logger.info(
            'Redirect failed. Responding with %s.',
            response['statusCode'],
            extra={'shortcode': shortcode[:64], 'event': REDIRECT_FAILED, 'error_code': e.error_code},
        )
        return response

    # 3- Redirect client to target URL
    logger.info('Redirecting client to target URL. Responding with 302.', extra={'shortcode': shortcode, 'event': REDIRECT_SUCCESS})
    return response_302(location=target_url)
