from azsize.client.async_client import AsyncAzSizeClient, connect
from azsize.client.sync_client import AzSizeClient

__all__ = [
    "AsyncAzSizeClient",
    "AzSizeClient",
    "connect",
]
