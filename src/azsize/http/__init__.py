from azsize.http.transport import AzSizeTransport

__all__ = ["AzSizeTransport"]
