from pydantic import BaseModel, ConfigDict, Field, field_validator

REQUIRED_FIELDS = ('name', 'email', 'service', 'message')
HONEYPOT_FIELD = 'website'


class InquiryModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra='ignore', str_strip_whitespace=True)

    name: str = Field(..., min_length=1)
    # No format check: the address is only used as Reply-To
    email: str = Field(..., min_length=1)
    phone: str = ''
    city: str = ''
    service: str = Field(..., min_length=1)
    message: str = Field(..., min_length=1)
    page: str = ''
    user_agent: str = Field(default='', alias='userAgent')
    website: str = ''

    @field_validator('*', mode='before')
    @classmethod
    def coerce_text(cls, v):
        if v is None:
            return ''
        if isinstance(v, bool):
            return 'true' if v else 'false'
        if isinstance(v, (int, float)):
            return str(v)
        return v


def is_honeypot(data) -> bool:
    """Bots fill the hidden field; any truthy value marks the submission as spam."""
    return isinstance(data, dict) and bool(data.get(HONEYPOT_FIELD))
