import base64
import json
import logging
from typing import NamedTuple

from pydantic import ValidationError

from contact_relay.cors import OriginPolicy
from contact_relay.models.validation import InquiryModel, is_honeypot
from contact_relay.utils.email import ConfigurationError, compose_inquiry_email

logger = logging.getLogger(__name__)

JSON_HEADERS = {'Content-Type': 'application/json'}


class RelayResponse(NamedTuple):
    status_code: int
    headers: dict
    body: str

    def to_lambda(self) -> dict:
        return {'statusCode': self.status_code, 'headers': dict(self.headers), 'body': self.body}


def json_response(status_code, payload, cors_headers=None) -> RelayResponse:
    headers = dict(JSON_HEADERS)
    headers.update(cors_headers or {})
    return RelayResponse(status_code, headers, json.dumps(payload, separators=(',', ':')))


def _reject_constant(token):
    raise ValueError(f"Invalid JSON constant: {token}")


def get_method(event) -> str:
    # HTTP API v2, then REST API v1
    http = (event.get('requestContext') or {}).get('http') or {}
    return (http.get('method') or event.get('httpMethod') or 'GET').upper()


def get_origin(event) -> str:
    headers = event.get('headers') or {}
    for key, value in headers.items():
        if key.lower() == 'origin':
            return value or ''
    return ''


def get_body(event) -> str:
    body = event.get('body') or ''
    if event.get('isBase64Encoded') and body:
        body = base64.b64decode(body).decode('utf-8', errors='replace')
    return body


def handle_event(event, settings, mailer) -> RelayResponse:
    """Turn one HTTP-like event into one HTTP-like response."""
    policy = OriginPolicy.from_settings(settings)
    method = get_method(event)
    origin = get_origin(event)

    if method == 'OPTIONS':
        headers = policy.preflight_headers_for(origin)
        if not headers:
            logger.info('Preflight rejected for origin %r', origin)
            return RelayResponse(403, {}, '')
        return RelayResponse(204, headers, '')

    if not policy.is_origin_allowed(origin):
        logger.info('Request rejected for origin %r', origin)
        return json_response(403, {'error': 'Forbidden origin'})

    cors = policy.cors_headers_for(origin)

    if method != 'POST':
        return json_response(405, {'error': 'Method Not Allowed'}, cors)

    try:
        data = json.loads(get_body(event) or '{}', parse_constant=_reject_constant)
    except ValueError:
        logger.info('Rejected request body: invalid JSON')
        return json_response(400, {'error': 'Invalid JSON'}, cors)

    # Silently succeed to mislead bots
    if is_honeypot(data):
        logger.info('Honeypot triggered from origin %r', origin)
        return json_response(200, {'status': 'ok'}, cors)

    try:
        inquiry = InquiryModel.model_validate(data)
    except ValidationError as e:
        fields = sorted({str(err['loc'][0]) for err in e.errors() if err['loc']})
        logger.info('Missing required fields: %s', ', '.join(fields))
        return json_response(422, {'error': 'Missing required fields'}, cors)

    if not settings.mail_configured:
        logger.error('Missing FROM_EMAIL or TO_EMAIL configuration')
        return json_response(500, {'error': 'Server not configured'}, cors)

    content = compose_inquiry_email(inquiry, settings.subject_prefix)

    try:
        mailer.send(content, reply_to=inquiry.email)
    except ConfigurationError:
        logger.exception('Mailer not configured')
        return json_response(500, {'error': 'Server not configured'}, cors)
    except Exception:
        logger.exception('SES send failed')
        return json_response(500, {'error': 'Email send failed'}, cors)

    return json_response(200, {'status': 'ok'}, cors)
