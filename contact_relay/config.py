import os
from collections.abc import Mapping

from dotenv import load_dotenv
from pydantic import BaseModel, ConfigDict, Field

# Load .env from project root
basedir = os.path.abspath(os.path.join(os.path.dirname(__file__), os.pardir))
env_path = os.path.join(basedir, '.env')
load_dotenv(env_path)


def env_flag(name, default='0'):
    return os.environ.get(name, default).strip().lower() in ('1', 'true', 'yes', 'on')


class Config:
    DEBUG = os.environ.get('FLASK_DEBUG', '0') == '1'

    # CORS: comma-separated allow-list, plus the single-origin form
    ALLOWED_ORIGINS = os.environ.get('ALLOWED_ORIGINS', '')
    ALLOWED_ORIGIN = os.environ.get('ALLOWED_ORIGIN', '')
    CORS_ALLOW_ANY_ORIGIN = env_flag('CORS_ALLOW_ANY_ORIGIN')
    CORS_MAX_AGE = int(os.environ.get('CORS_MAX_AGE', '86400'))

    # SES addressing (FROM_EMAIL must be a verified sending identity)
    FROM_EMAIL = os.environ.get('FROM_EMAIL')
    TO_EMAIL = os.environ.get('TO_EMAIL')
    EMAIL_SUBJECT_PREFIX = os.environ.get('EMAIL_SUBJECT_PREFIX', 'Website Contact')

    # Lambda injects AWS_REGION; fallback for local runs
    AWS_REGION = os.environ.get('AWS_REGION', 'us-east-1')
    SES_ENDPOINT_URL = os.environ.get('SES_ENDPOINT_URL')
    # Unset means botocore's own defaults apply
    SES_CONNECT_TIMEOUT = os.environ.get('SES_CONNECT_TIMEOUT')
    SES_READ_TIMEOUT = os.environ.get('SES_READ_TIMEOUT')


class ProductionConfig(Config):
    DEBUG = False
    CORS_ALLOW_ANY_ORIGIN = False


class DevelopmentConfig(Config):
    DEBUG = True


class TestingConfig(Config):
    TESTING = True
    DEBUG = True
    ALLOWED_ORIGINS = 'https://example.com,https://www.example.com'
    ALLOWED_ORIGIN = ''
    CORS_ALLOW_ANY_ORIGIN = False
    CORS_MAX_AGE = 86400
    FROM_EMAIL = 'no-reply@example.com'
    TO_EMAIL = 'owner@example.com'
    EMAIL_SUBJECT_PREFIX = 'Website Contact'
    AWS_REGION = 'us-east-1'
    SES_ENDPOINT_URL = None
    SES_CONNECT_TIMEOUT = None
    SES_READ_TIMEOUT = None


def parse_origins(*values):
    """Split comma-separated origin lists into one ordered, de-duplicated tuple."""
    origins = []
    for value in values:
        for origin in (value or '').split(','):
            origin = origin.strip()
            if origin and origin not in origins:
                origins.append(origin)
    return tuple(origins)


def _blank_to_none(value):
    value = (value or '').strip()
    return value or None


def _optional_float(value):
    if value is None or str(value).strip() == '':
        return None
    return float(value)


class RelaySettings(BaseModel):
    """Process-wide relay configuration, built once and never mutated."""

    model_config = ConfigDict(frozen=True)

    allowed_origins: tuple[str, ...] = ()
    allow_any_origin: bool = False
    cors_max_age: int = Field(default=86400, ge=0)
    from_email: str | None = None
    to_email: str | None = None
    subject_prefix: str = 'Website Contact'
    aws_region: str = 'us-east-1'
    ses_endpoint_url: str | None = None
    ses_connect_timeout: float | None = None
    ses_read_timeout: float | None = None

    @property
    def mail_configured(self) -> bool:
        return bool(self.from_email and self.to_email)

    @classmethod
    def from_config(cls, config) -> 'RelaySettings':
        """Build settings from a Flask config mapping or a Config class."""
        if not isinstance(config, Mapping):
            config = {key: getattr(config, key) for key in dir(config) if key.isupper()}

        return cls(
            allowed_origins=parse_origins(config.get('ALLOWED_ORIGINS'), config.get('ALLOWED_ORIGIN')),
            allow_any_origin=bool(config.get('CORS_ALLOW_ANY_ORIGIN', False)),
            cors_max_age=int(config.get('CORS_MAX_AGE', 86400)),
            from_email=_blank_to_none(config.get('FROM_EMAIL')),
            to_email=_blank_to_none(config.get('TO_EMAIL')),
            subject_prefix=config.get('EMAIL_SUBJECT_PREFIX') or 'Website Contact',
            aws_region=config.get('AWS_REGION') or 'us-east-1',
            ses_endpoint_url=_blank_to_none(config.get('SES_ENDPOINT_URL')),
            ses_connect_timeout=_optional_float(config.get('SES_CONNECT_TIMEOUT')),
            ses_read_timeout=_optional_float(config.get('SES_READ_TIMEOUT')),
        )
