from __future__ import annotations

from azsize.constants import API_KEY_HEADER, API_KEY_PREFIX
from azsize.errors import ConfigError

MASKED_PREFIX_LENGTH = 12


def looks_like_api_key(value: str | None) -> bool:
    return bool(value) and value.startswith(API_KEY_PREFIX)


def validate_api_key(api_key: str | None) -> str:
    """Return the key stripped of whitespace, or raise when it is not an azsize key.

    Example:
        >>> validate_api_key(" azsk_abc ")
        'azsk_abc'
    """

    key = (api_key or "").strip()
    if not looks_like_api_key(key):
        raise ConfigError(f'Invalid API key format. API keys should start with "{API_KEY_PREFIX}"')
    return key


def mask_api_key(api_key: str) -> str:
    return f"{api_key[:MASKED_PREFIX_LENGTH]}..."


def auth_headers(api_key: str | None) -> dict[str, str]:
    """Headers attached to every API call; empty when no key is configured."""

    if not api_key:
        return {}
    return {API_KEY_HEADER: api_key}
