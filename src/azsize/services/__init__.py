from azsize.services.availability import AvailabilityService
from azsize.services.history import HistoryService

__all__ = [
    "AvailabilityService",
    "HistoryService",
]
