import base64
import json
from unittest import mock

import pytest

from contact_relay import create_app
from contact_relay.config import RelaySettings, TestingConfig

ALLOWED_ORIGIN = 'https://example.com'


@pytest.fixture
def settings():
    return RelaySettings.from_config(TestingConfig)


@pytest.fixture
def mailer():
    fake = mock.Mock()
    fake.send.return_value = 'message-id-1'
    return fake


@pytest.fixture
def app(mailer):
    return create_app(TestingConfig, mailer=mailer)


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def valid_body():
    return {
        'name': 'Ann',
        'email': 'a@x.com',
        'phone': '555-0100',
        'city': 'Phoenix',
        'service': 'Repair',
        'message': 'Hi',
        'page': 'https://example.com/contact',
        'userAgent': 'pytest',
    }


@pytest.fixture
def make_event():
    def _make_event(method='POST', origin=ALLOWED_ORIGIN, body=None, raw=None, v2=False, encode=False):
        headers = {'content-type': 'application/json'}
        if origin is not None:
            headers['origin'] = origin
        if raw is None:
            raw = json.dumps(body) if body is not None else ''
        event = {'headers': headers, 'body': raw, 'isBase64Encoded': encode}
        if encode:
            event['body'] = base64.b64encode(raw.encode('utf-8')).decode('ascii')
        if v2:
            event['requestContext'] = {'http': {'method': method}}
        else:
            event['httpMethod'] = method
        return event
    return _make_event
