import logging
import sys
import os
from pythonjsonlogger import jsonlogger
from flask import request, has_request_context

HANDLER_NAME = 'contact_relay.stdout'


class RequestFormatter(jsonlogger.JsonFormatter):
    def add_fields(self, log_record, record, message_dict):
        super(RequestFormatter, self).add_fields(log_record, record, message_dict)
        if has_request_context():
            log_record['ip'] = request.remote_addr
            log_record['method'] = request.method
            log_record['path'] = request.path
            log_record['origin'] = request.headers.get('Origin')
        else:
            log_record['ip'] = None
            log_record['method'] = None
            log_record['path'] = None
            log_record['origin'] = None


def configure_logging(logger, debug=False):
    """Attach one stdout handler: JSON lines in production, plain text when debugging."""
    log_level = os.environ.get('LOG_LEVEL', 'INFO').upper()
    handler = logging.StreamHandler(sys.stdout)
    handler.set_name(HANDLER_NAME)

    if not debug:
        formatter = RequestFormatter('%(asctime)s %(levelname)s %(name)s %(message)s %(ip)s %(method)s %(path)s')
        handler.setFormatter(formatter)
    else:
        # Simple text logging for debug
        handler.setFormatter(logging.Formatter('%(asctime)s %(levelname)s %(name)s: %(message)s'))

    for existing in list(logger.handlers):
        if existing.get_name() == HANDLER_NAME:
            logger.removeHandler(existing)
    logger.addHandler(handler)
    logger.setLevel(log_level)
    return handler


def configure_lambda_logging(logger, debug=False):
    """Reuse the Lambda runtime's root handler; add ours only outside that runtime."""
    if logging.getLogger().handlers:
        logger.setLevel(os.environ.get('LOG_LEVEL', 'INFO').upper())
        return None
    return configure_logging(logger, debug=debug)
