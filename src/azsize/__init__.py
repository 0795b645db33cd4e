from azsize.aggregate import aggregate_availability, compare_rows
from azsize.client import AsyncAzSizeClient, AzSizeClient, connect
from azsize.config import AzSizeConfig, CredentialStore
from azsize.errors import (
    APIError,
    AzSizeError,
    ConfigError,
    ErrorKind,
    InvalidArgumentError,
    MalformedResponseError,
    RateLimitError,
    RequestError,
    RequestTimeoutError,
)
from azsize.fanout import fan_out
from azsize.models import AvailabilityEntry, FailureKind, RegionQueryResult, VmRecord

__version__ = "0.1.0"

__all__ = [
    "__version__",
    "APIError",
    "AsyncAzSizeClient",
    "AvailabilityEntry",
    "AzSizeClient",
    "AzSizeConfig",
    "AzSizeError",
    "ConfigError",
    "CredentialStore",
    "ErrorKind",
    "FailureKind",
    "InvalidArgumentError",
    "MalformedResponseError",
    "RateLimitError",
    "RegionQueryResult",
    "RequestError",
    "RequestTimeoutError",
    "VmRecord",
    "aggregate_availability",
    "compare_rows",
    "connect",
    "fan_out",
]
