"""Form submitter for the contact relay.

Mirrors what the site's form script does in the browser: honeypot and
required-field checks, a pending submit button, one JSON POST without
cookies, and success/error indicators.
"""
import logging
from enum import Enum
from urllib.parse import urlsplit

import requests

logger = logging.getLogger(__name__)

FORM_FIELDS = ('name', 'email', 'phone', 'city', 'service', 'message', 'website')
REQUIRED_FIELDS = ('name', 'email', 'service', 'message')
SENDING_LABEL = 'Sending…'
DEFAULT_USER_AGENT = 'contact-relay-client/1.0'


class SubmitOutcome(str, Enum):
    SENT = 'sent'
    FAILED = 'failed'
    INVALID = 'invalid'
    SPAM_DROPPED = 'spam_dropped'


class ContactForm:
    """Field values plus the visible state of the form."""

    def __init__(self, submit_label='Send', **values):
        unknown = set(values) - set(FORM_FIELDS)
        if unknown:
            raise TypeError(f"Unknown form fields: {', '.join(sorted(unknown))}")
        self.values = {field: values.get(field) or '' for field in FORM_FIELDS}
        self.submit_label = submit_label
        self.submit_disabled = False
        self.alert_ok_visible = False
        self.alert_err_visible = False

    def reset(self):
        self.values = {field: '' for field in FORM_FIELDS}

    def show_success(self):
        self.alert_ok_visible = True

    def show_error(self):
        self.alert_err_visible = True

    def hide_alerts(self):
        self.alert_ok_visible = False
        self.alert_err_visible = False


def origin_of(url):
    """Origin a browser would send for a page, e.g. ``https://example.com``."""
    parts = urlsplit(url or '')
    if not parts.scheme or not parts.netloc:
        return None
    return f"{parts.scheme}://{parts.netloc}"


class ContactFormSubmitter:
    def __init__(self, api_url, session=None, page_url='', user_agent=DEFAULT_USER_AGENT, timeout=None, origin=None):
        self.api_url = api_url
        self.session = session or requests.Session()
        self.page_url = page_url
        self.user_agent = user_agent
        self.timeout = timeout
        self.origin = origin or origin_of(page_url)

    def collect(self, form) -> dict:
        values = form.values
        return {
            'name': values['name'].strip(),
            'email': values['email'].strip(),
            'phone': values['phone'].strip(),
            'city': values['city'].strip(),
            'service': values['service'].strip(),
            'message': values['message'].strip(),
            'page': self.page_url,
            'userAgent': self.user_agent,
        }

    def post(self, payload) -> requests.Response:
        headers = {'Content-Type': 'application/json', 'User-Agent': self.user_agent}
        if self.origin:
            headers['Origin'] = self.origin
        # A bare prepared request never picks up the session's cookie jar
        prepared = requests.Request('POST', self.api_url, json=payload, headers=headers).prepare()
        return self.session.send(prepared, timeout=self.timeout)

    def submit(self, form) -> SubmitOutcome:
        form.hide_alerts()

        if form.values['website']:
            form.show_success()
            form.reset()
            return SubmitOutcome.SPAM_DROPPED

        payload = self.collect(form)
        if not all(payload[field] for field in REQUIRED_FIELDS):
            logger.warning('Validation failed; missing one of %s', ', '.join(REQUIRED_FIELDS))
            form.show_error()
            return SubmitOutcome.INVALID

        previous_label = form.submit_label
        form.submit_disabled = True
        form.submit_label = SENDING_LABEL

        try:
            logger.info('POST %s', self.api_url)
            response = self.post(payload)
            if not response.ok:
                logger.error('API error %s: %s', response.status_code, response.text)
                form.show_error()
                return SubmitOutcome.FAILED
            logger.info('API success %s', response.status_code)
            form.reset()
            form.show_success()
            return SubmitOutcome.SENT
        except requests.RequestException as e:
            logger.error('Network error: %s', e)
            form.show_error()
            return SubmitOutcome.FAILED
        finally:
            form.submit_disabled = False
            form.submit_label = previous_label

    def ping(self):
        """Send a fixed test inquiry; returns ``(status, text)`` or ``(None, error)``."""
        payload = {
            'name': 'Debug Tester',
            'email': 'test@example.com',
            'phone': '000-000-0000',
            'city': 'Phoenix',
            'service': 'Debug',
            'message': 'Debug ping from the contact relay client',
            'page': self.page_url,
            'userAgent': self.user_agent,
        }
        try:
            response = self.post(payload)
        except requests.RequestException as e:
            logger.error('Ping network error: %s', e)
            return None, str(e)
        return response.status_code, response.text
