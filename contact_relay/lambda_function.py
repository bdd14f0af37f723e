"""AWS Lambda entry point: ``contact_relay.lambda_function.lambda_handler``."""
import logging

from contact_relay.config import Config, RelaySettings
from contact_relay.relay import handle_event
from contact_relay.utils.email import SesMailer
from contact_relay.utils.logging import configure_lambda_logging

configure_lambda_logging(logging.getLogger('contact_relay'), debug=Config.DEBUG)

# Cold start: configuration and the SES client live for the whole process
settings = RelaySettings.from_config(Config)
mailer = SesMailer.from_settings(settings)


def lambda_handler(event, context):
    return handle_event(event, settings, mailer).to_lambda()
