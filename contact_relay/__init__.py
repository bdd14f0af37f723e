from flask import Flask
from flask.logging import default_handler
from contact_relay.config import Config, RelaySettings
from contact_relay.utils.email import SesMailer
from contact_relay.utils.logging import configure_logging


def create_app(config_class=Config, mailer=None):
    app = Flask(__name__)
    app.config.from_object(config_class)

    app.logger.removeHandler(default_handler)
    configure_logging(app.logger, debug=app.debug)

    # Built once per process and shared read-only by every request
    settings = RelaySettings.from_config(app.config)
    if mailer is None:
        mailer = SesMailer.from_settings(settings)
    app.extensions['contact_relay'] = {'settings': settings, 'mailer': mailer}

    if not settings.allowed_origins and not settings.allow_any_origin:
        app.logger.warning('ALLOWED_ORIGINS is empty; every cross-origin request will be rejected')
    if settings.allow_any_origin:
        app.logger.warning('CORS_ALLOW_ANY_ORIGIN is set; any origin is accepted')

    # Blueprints
    from contact_relay.routes.contact import contact_bp
    app.register_blueprint(contact_bp)

    from contact_relay.cli import ping_contact_command
    app.cli.add_command(ping_contact_command)

    @app.errorhandler(404)
    def page_not_found(e):
        return {'error': 'Not Found'}, 404

    return app
