PREFLIGHT_METHODS = 'POST,OPTIONS'
PREFLIGHT_HEADERS = 'Content-Type'


class OriginPolicy:
    """Exact allow-list, with a debug override that echoes ``*``.

    The override comes from trusted configuration only. A single allowed
    origin is just a one-item allow-list.
    """

    def __init__(self, allowed_origins=(), allow_any=False, max_age=86400):
        self.allowed_origins = frozenset(allowed_origins)
        self.allow_any = allow_any
        self.max_age = max_age

    @classmethod
    def from_settings(cls, settings):
        return cls(settings.allowed_origins, settings.allow_any_origin, settings.cors_max_age)

    def is_origin_allowed(self, origin: str | None) -> bool:
        if self.allow_any:
            return True
        return bool(origin) and origin in self.allowed_origins

    def cors_headers_for(self, origin: str | None) -> dict[str, str]:
        if not self.is_origin_allowed(origin):
            return {}
        return {
            'Access-Control-Allow-Origin': '*' if self.allow_any else origin,
            'Access-Control-Allow-Credentials': 'false',
            'Vary': 'Origin',
        }

    def preflight_headers_for(self, origin: str | None) -> dict[str, str]:
        headers = self.cors_headers_for(origin)
        if headers:
            headers.update({
                'Access-Control-Allow-Methods': PREFLIGHT_METHODS,
                'Access-Control-Allow-Headers': PREFLIGHT_HEADERS,
                'Access-Control-Max-Age': str(self.max_age),
            })
        return headers
