from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum

RATE_LIMIT_MESSAGE = "Rate limit exceeded. Please authenticate with an API key to get more checks. Run: azsize auth"


class ErrorKind(StrEnum):
    PER_REGION_FAILURE = "per_region_failure"
    INVALID_ARGUMENT = "invalid_argument"
    CONFIG = "config"


class AzSizeError(Exception):
    """Base error type for azsize."""

    kind: ErrorKind = ErrorKind.PER_REGION_FAILURE


class ConfigError(AzSizeError):
    """Raised when configuration cannot be loaded, validated or saved."""

    kind = ErrorKind.CONFIG


class InvalidArgumentError(AzSizeError, ValueError):
    """Raised before any network activity when caller arguments are unusable."""

    kind = ErrorKind.INVALID_ARGUMENT


class RequestError(AzSizeError):
    """Raised when a single availability API call fails."""


class RequestTimeoutError(RequestError):
    """Raised when an API call does not finish in time."""


class MalformedResponseError(RequestError):
    """Raised when the API answers with a payload of the wrong shape."""


@dataclass(slots=True)
class APIError(RequestError):
    """Represents a non-success azsize API response."""

    status_code: int
    message: str
    body: str | None = None

    def __str__(self) -> str:
        if self.body:
            return f"HTTP {self.status_code}: {self.message} ({self.body})"
        return f"HTTP {self.status_code}: {self.message}"


class RateLimitError(APIError):
    """HTTP 429 from the API; authenticating with an API key raises the limit."""

    def __init__(self, message: str = RATE_LIMIT_MESSAGE, body: str | None = None) -> None:
        super().__init__(429, message, body)

    def __str__(self) -> str:
        return self.message
