from azsize.models.availability import (
    AvailabilityEntry,
    AvailabilityResponse,
    ComparisonRow,
    FailureKind,
    HistoricalUsage,
    RegionQueryResult,
    VmRecord,
)
from azsize.models.catalog import RegionInfo, SeriesInfo
from azsize.models.reports import CheckResult, ComparisonReport, FindReport

__all__ = [
    "AvailabilityEntry",
    "AvailabilityResponse",
    "CheckResult",
    "ComparisonReport",
    "ComparisonRow",
    "FailureKind",
    "FindReport",
    "HistoricalUsage",
    "RegionInfo",
    "RegionQueryResult",
    "SeriesInfo",
    "VmRecord",
]
