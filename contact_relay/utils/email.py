import logging
from typing import NamedTuple

import boto3
from botocore.config import Config as BotoConfig
from botocore.exceptions import BotoCoreError, ClientError
from markupsafe import escape

logger = logging.getLogger(__name__)

CHARSET = 'UTF-8'


class ConfigurationError(RuntimeError):
    """Sender or recipient address is missing."""


class EmailSendError(RuntimeError):
    """SES rejected the message or could not be reached."""


class EmailContent(NamedTuple):
    subject: str
    text: str
    html: str


def _esc(value) -> str:
    return str(escape(value))


def compose_inquiry_email(inquiry, subject_prefix='Website Contact') -> EmailContent:
    subject = f"{subject_prefix} — {inquiry.name} ({inquiry.service})"

    lines = [
        'New inquiry:',
        '',
        f"Name: {inquiry.name}",
        f"Email: {inquiry.email}",
        f"Phone: {inquiry.phone}",
        f"City/Area: {inquiry.city}",
        f"Service: {inquiry.service}",
        '',
        'Message:',
        inquiry.message,
        '',
        f"Page: {inquiry.page}",
        f"User-Agent: {inquiry.user_agent}",
    ]
    text = '\n'.join(lines) + '\n'

    message_html = _esc(inquiry.message).replace('\n', '<br>')
    html = (
        '<h2>New inquiry</h2>\n'
        f"<p><strong>Name:</strong> {_esc(inquiry.name)}<br>\n"
        f"<strong>Email:</strong> {_esc(inquiry.email)}<br>\n"
        f"<strong>Phone:</strong> {_esc(inquiry.phone)}<br>\n"
        f"<strong>City/Area:</strong> {_esc(inquiry.city)}<br>\n"
        f"<strong>Service:</strong> {_esc(inquiry.service)}</p>\n"
        f"<p><strong>Message:</strong><br>{message_html}</p>\n"
        '<hr>\n'
        f"<p><strong>Page:</strong> {_esc(inquiry.page)}<br>\n"
        f"<strong>User-Agent:</strong> {_esc(inquiry.user_agent)}</p>"
    )
    return EmailContent(subject, text, html)


class SesMailer:
    """Sends composed inquiries through the SES v2 API."""

    def __init__(self, from_email, to_email, client=None, region='us-east-1',
                 endpoint_url=None, connect_timeout=None, read_timeout=None):
        self.from_email = from_email
        self.to_email = to_email
        if client is None:
            # No retries here: a failed send is terminal for the invocation
            options = {'retries': {'max_attempts': 1, 'mode': 'standard'}}
            if connect_timeout is not None:
                options['connect_timeout'] = connect_timeout
            if read_timeout is not None:
                options['read_timeout'] = read_timeout
            client = boto3.client(
                'sesv2',
                region_name=region,
                endpoint_url=endpoint_url,
                config=BotoConfig(**options),
            )
        self.client = client

    @classmethod
    def from_settings(cls, settings, client=None):
        return cls(
            settings.from_email,
            settings.to_email,
            client=client,
            region=settings.aws_region,
            endpoint_url=settings.ses_endpoint_url,
            connect_timeout=settings.ses_connect_timeout,
            read_timeout=settings.ses_read_timeout,
        )

    def send(self, content: EmailContent, reply_to: str) -> str:
        if not self.from_email or not self.to_email:
            raise ConfigurationError('FROM_EMAIL and TO_EMAIL must both be set')

        try:
            result = self.client.send_email(
                FromEmailAddress=self.from_email,
                Destination={'ToAddresses': [self.to_email]},
                ReplyToAddresses=[reply_to],
                Content={
                    'Simple': {
                        'Subject': {'Data': content.subject, 'Charset': CHARSET},
                        'Body': {
                            'Text': {'Data': content.text, 'Charset': CHARSET},
                            'Html': {'Data': content.html, 'Charset': CHARSET},
                        },
                    },
                },
            )
        except (ClientError, BotoCoreError) as e:
            raise EmailSendError(str(e)) from e

        message_id = result.get('MessageId', '')
        logger.info('Inquiry email sent (message id %s)', message_id)
        return message_id
