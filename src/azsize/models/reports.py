from __future__ import annotations

from pydantic import Field

from azsize.models.availability import AvailabilityEntry, ComparisonRow, RegionQueryResult, VmRecord
from azsize.models.common import AzSizeModel


class CheckResult(AzSizeModel):
    region: str
    vm_size: str
    series_filter: str
    vm: VmRecord | None = None
    historical: float | None = None


class ComparisonReport(AzSizeModel):
    vm_size: str
    series_filter: str
    results: list[RegionQueryResult] = Field(default_factory=list)
    rows: list[ComparisonRow] = Field(default_factory=list)

    @property
    def rate_limited(self) -> bool:
        return any(result.rate_limited for result in self.results)


class FindReport(AzSizeModel):
    vm_size: str
    series_filter: str
    total_regions: int
    limit: int | None = None
    available: list[AvailabilityEntry] = Field(default_factory=list)
    regions: list[AvailabilityEntry] = Field(default_factory=list)
    results: list[RegionQueryResult] = Field(default_factory=list)

    @property
    def available_count(self) -> int:
        return len(self.available)

    @property
    def truncated(self) -> bool:
        return self.limit is not None and self.available_count > self.limit

    @property
    def rate_limited(self) -> bool:
        return any(result.rate_limited for result in self.results)
