"""Unit tests for the shorten_url handler.

Verify the handler responds with proper HTTP status codes, validates
request bodies and maps service errors onto HTTP responses.

Test coverage includes:

1. Successful shortening
   - Ensures valid URLs return 200 with the short link, shortcode and target.
   - Ensures the legacy 'target_url' body field is accepted.

2. Bad requests
   - Ensures invalid JSON, missing URLs and invalid URLs return 400.

3. Service errors
   - Ensures each error kind maps onto its HTTP status.
   - Ensures rate limited callers get 429 with Retry-After.

4. Unexpected errors
   - Ensures unexpected exceptions become a JSON 500 outside local runs,
     including when APP_ENV is not set at all.
"""

import json

import pytest

from shorter.handlers.shorten_url import app
from shorter.dao.exceptions import DataStoreError, DataStoreTimeoutError
from shorter.exceptions import GenerationExhaustedError, RateLimitExceededError, RequestCancelledError


# -------------------------------
# Fixtures
# -------------------------------


def make_event(body, source_ip='203.0.113.7'):
    return {
        'resource': '/shorten',
        'httpMethod': 'POST',
        'path': '/shorten',
        'body': body if isinstance(body, str) or body is None else json.dumps(body),
        'requestContext': {'identity': {'sourceIp': source_ip}},
    }


@pytest.fixture
def use_real_service(monkeypatch, real_service):
    monkeypatch.setattr(app, 'get_service', lambda: real_service)
    return real_service


@pytest.fixture
def use_mock_service(monkeypatch, mock_service):
    monkeypatch.setattr(app, 'get_service', lambda: mock_service)
    return mock_service


# -------------------------------
# 1. Successful shortening
# -------------------------------


@pytest.mark.parametrize('field', ['url', 'target_url'])
def test_shorten_url(use_real_service, memory_dao, context, target_url, field):
    response = app.handler(make_event({field: target_url}), context)
    body = json.loads(response['body'])

    assert response['statusCode'] == 200
    assert response['headers']['Content-Type'] == 'application/json'
    assert body['code'] == 200
    shortcode = body['data']['shortcode']
    assert body['data'] == {
        'url': f'https://s.example.com/{shortcode}',
        'shortcode': shortcode,
        'target_url': target_url,
    }
    assert memory_dao.get(shortcode).target == target_url


def test_shorten_passes_source_ip_as_caller(use_mock_service, context, target_url):
    use_mock_service.shorten.side_effect = DataStoreError('down')
    app.handler(make_event({'url': target_url}, source_ip='198.51.100.1'), context)
    use_mock_service.shorten.assert_called_once_with(target_url, caller='198.51.100.1')


def test_shorten_without_source_ip_is_anonymous(use_mock_service, context, target_url):
    use_mock_service.shorten.side_effect = DataStoreError('down')
    app.handler({'body': json.dumps({'url': target_url})}, context)
    use_mock_service.shorten.assert_called_once_with(target_url, caller='anonymous')


# -------------------------------
# 2. Bad requests
# -------------------------------


@pytest.mark.parametrize(
    'body, error_code',
    [
        ('{not json', 'SHORTEN_URL:INVALID_JSON_BODY'),
        (None, 'SHORTEN_URL:MISSING_TARGET_URL'),
        ({}, 'SHORTEN_URL:MISSING_TARGET_URL'),
        ({'url': ''}, 'SHORTEN_URL:MISSING_TARGET_URL'),
        (['https://example.com'], 'SHORTEN_URL:MISSING_TARGET_URL'),
        ({'url': 'not a url'}, 'app:invalid_url_error'),
        ({'url': 'ftp://example.com'}, 'app:invalid_url_error'),
    ],
)
def test_bad_requests(use_real_service, memory_dao, context, body, error_code):
    response = app.handler(make_event(body), context)

    assert response['statusCode'] == 400
    assert json.loads(response['body'])['error_code'] == error_code
    assert memory_dao.redirects == {}


# -------------------------------
# 3. Service errors
# -------------------------------


@pytest.mark.parametrize(
    'error, status',
    [
        (GenerationExhaustedError(5), 500),
        (DataStoreError("Can't connect to Redis at redis:6379/0."), 503),
        (DataStoreTimeoutError('Redis timed out.'), 504),
        (RequestCancelledError('Deadline exceeded.'), 504),
    ],
)
def test_service_errors(use_mock_service, context, target_url, error, status):
    use_mock_service.shorten.side_effect = error

    response = app.handler(make_event({'url': target_url}), context)
    body = json.loads(response['body'])

    assert response['statusCode'] == status
    assert body == {'code': status, 'message': str(error), 'error_code': error.error_code}


def test_rate_limited(use_mock_service, context, target_url):
    use_mock_service.shorten.side_effect = RateLimitExceededError('203.0.113.7', 2.2)

    response = app.handler(make_event({'url': target_url}), context)

    assert response['statusCode'] == 429
    assert response['headers']['Retry-After'] == '3'


def test_rate_limit_end_to_end(use_real_service, context, target_url):
    statuses = [app.handler(make_event({'url': target_url}), context)['statusCode'] for _ in range(4)]
    assert statuses == [200, 200, 200, 429]


# -------------------------------
# 4. Unexpected errors
# -------------------------------


def test_unexpected_error_returns_500(monkeypatch, use_mock_service, context, target_url):
    monkeypatch.setenv('APP_ENV', 'prod')
    use_mock_service.shorten.side_effect = RuntimeError('boom')

    response = app.handler(make_event({'url': target_url}), context)

    assert response['statusCode'] == 500
    assert json.loads(response['body'])['error_code'] == 'UNKNOWN_INTERNAL_SERVER_ERROR'


def test_unexpected_error_returns_500_when_app_env_unset(monkeypatch, use_mock_service, context, target_url):
    monkeypatch.delenv('APP_ENV', raising=False)
    use_mock_service.shorten.side_effect = RuntimeError('boom')

    response = app.handler(make_event({'url': target_url}), context)

    assert response['statusCode'] == 500
    assert json.loads(response['body']) == {'message': 'Internal Server Error', 'error_code': 'UNKNOWN_INTERNAL_SERVER_ERROR'}
