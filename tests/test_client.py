import json
from unittest import mock

import pytest
import requests

from contact_relay.client import (
    SENDING_LABEL,
    ContactForm,
    ContactFormSubmitter,
    SubmitOutcome,
    origin_of,
)

API_URL = 'https://api.example.com/contact'
PAGE_URL = 'https://example.com/contact.html'


@pytest.fixture
def session():
    fake = mock.Mock()
    fake.send.return_value = mock.Mock(ok=True, status_code=200, text='{"status":"ok"}')
    return fake


@pytest.fixture
def submitter(session):
    return ContactFormSubmitter(API_URL, session=session, page_url=PAGE_URL, user_agent='pytest-agent')


@pytest.fixture
def form():
    return ContactForm(
        submit_label='Send Message',
        name=' Ann ',
        email='a@x.com ',
        phone=' 555-0100',
        city='Phoenix',
        service='Repair',
        message=' Hi there ',
    )


def test_successful_submit_resets_form(submitter, session, form):
    outcome = submitter.submit(form)

    assert outcome is SubmitOutcome.SENT
    assert form.alert_ok_visible
    assert not form.alert_err_visible
    assert form.values['name'] == ''
    assert form.submit_disabled is False
    assert form.submit_label == 'Send Message'
    session.send.assert_called_once()


def test_request_is_json_post_without_cookies(submitter, session, form):
    submitter.submit(form)

    prepared = session.send.call_args.args[0]
    assert prepared.method == 'POST'
    assert prepared.url == API_URL
    assert prepared.headers['Content-Type'] == 'application/json'
    assert prepared.headers['Origin'] == 'https://example.com'
    assert 'Cookie' not in prepared.headers
    assert json.loads(prepared.body) == {
        'name': 'Ann',
        'email': 'a@x.com',
        'phone': '555-0100',
        'city': 'Phoenix',
        'service': 'Repair',
        'message': 'Hi there',
        'page': PAGE_URL,
        'userAgent': 'pytest-agent',
    }


def test_submit_control_is_pending_during_request(submitter, session, form):
    seen = {}

    def send(prepared, timeout=None):
        seen['disabled'] = form.submit_disabled
        seen['label'] = form.submit_label
        return mock.Mock(ok=True, status_code=200, text='')

    session.send.side_effect = send
    submitter.submit(form)

    assert seen == {'disabled': True, 'label': SENDING_LABEL}
    assert form.submit_disabled is False


def test_error_status_keeps_values(submitter, session, form):
    session.send.return_value = mock.Mock(ok=False, status_code=422, text='{"error":"Missing required fields"}')

    outcome = submitter.submit(form)

    assert outcome is SubmitOutcome.FAILED
    assert form.alert_err_visible
    assert not form.alert_ok_visible
    assert form.values['name'] == ' Ann '
    assert form.submit_disabled is False
    assert form.submit_label == 'Send Message'


def test_network_failure_restores_control(submitter, session, form):
    session.send.side_effect = requests.ConnectionError('connection refused')

    outcome = submitter.submit(form)

    assert outcome is SubmitOutcome.FAILED
    assert form.alert_err_visible
    assert form.submit_disabled is False
    assert form.submit_label == 'Send Message'
    assert session.send.call_count == 1


def test_honeypot_is_dropped_silently(submitter, session, form):
    form.values['website'] = 'http://spam.example'

    outcome = submitter.submit(form)

    assert outcome is SubmitOutcome.SPAM_DROPPED
    assert form.alert_ok_visible
    assert form.values['name'] == ''
    session.send.assert_not_called()


@pytest.mark.parametrize('field', ['name', 'email', 'service', 'message'])
def test_missing_required_field_blocks_submit(submitter, session, form, field):
    form.values[field] = '   '

    outcome = submitter.submit(form)

    assert outcome is SubmitOutcome.INVALID
    assert form.alert_err_visible
    assert form.submit_label == 'Send Message'
    session.send.assert_not_called()


def test_previous_alerts_are_hidden(submitter, form):
    form.show_error()
    submitter.submit(form)

    assert not form.alert_err_visible
    assert form.alert_ok_visible


def test_unknown_form_field():
    with pytest.raises(TypeError):
        ContactForm(company='ACME')


def test_ping(submitter, session):
    assert submitter.ping() == (200, '{"status":"ok"}')
    body = json.loads(session.send.call_args.args[0].body)
    assert body['name'] == 'Debug Tester'


def test_ping_network_error(submitter, session):
    session.send.side_effect = requests.Timeout('timed out')
    status, text = submitter.ping()

    assert status is None
    assert 'timed out' in text


@pytest.mark.parametrize('url, expected', [
    ('https://example.com/contact.html?x=1', 'https://example.com'),
    ('http://localhost:8080/', 'http://localhost:8080'),
    ('', None),
    ('/contact', None),
])
def test_origin_of(url, expected):
    assert origin_of(url) == expected


def test_submitter_against_relay(client, mailer, form):
    """Drive the Flask relay through the submitter."""

    def send(prepared, timeout=None):
        response = client.open(prepared.path_url, method=prepared.method,
                               data=prepared.body,
                               headers={k: v for k, v in prepared.headers.items() if k.lower() != 'content-length'})
        return mock.Mock(ok=response.status_code < 400, status_code=response.status_code,
                         text=response.get_data(as_text=True))

    session = mock.Mock()
    session.send.side_effect = send
    submitter = ContactFormSubmitter('http://localhost/contact', session=session, page_url=PAGE_URL)

    assert submitter.submit(form) is SubmitOutcome.SENT
    mailer.send.assert_called_once()
