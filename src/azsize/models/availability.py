from __future__ import annotations

from enum import StrEnum

from pydantic import AliasChoices, Field, model_validator

from azsize.models.common import AzSizeModel


class FailureKind(StrEnum):
    NETWORK = "network"
    TIMEOUT = "timeout"
    HTTP = "http"
    RATE_LIMITED = "rate_limited"
    MALFORMED = "malformed"


class VmRecord(AzSizeModel):
    """Availability snapshot of one VM size in one region."""

    name: str
    available: bool
    vcpus: int | None = Field(default=None, alias="vCPUs", validation_alias=AliasChoices("vCPUs", "vcpus"))
    memory_gb: float | None = Field(
        default=None,
        alias="memoryGB",
        validation_alias=AliasChoices("memoryGB", "memory_gb"),
    )
    price_per_month: float | None = Field(
        default=None,
        alias="pricePerMonth",
        validation_alias=AliasChoices("pricePerMonth", "price_per_month"),
    )
    restriction: str | None = None


class AvailabilityResponse(AzSizeModel):
    vms: list[VmRecord]


class RegionQueryResult(AzSizeModel):
    """Outcome of one region's query: either ``vms`` or ``error``, never both."""

    region: str
    vms: list[VmRecord] | None = None
    error: str | None = None
    failure_kind: FailureKind | None = None

    @model_validator(mode="after")
    def _exactly_one_outcome(self) -> RegionQueryResult:
        if (self.vms is None) == (self.error is None):
            raise ValueError("exactly one of 'vms' or 'error' must be set")
        if self.failure_kind is not None and self.error is None:
            raise ValueError("'failure_kind' requires 'error'")
        return self

    @classmethod
    def success(cls, region: str, vms: list[VmRecord]) -> RegionQueryResult:
        return cls(region=region, vms=list(vms))

    @classmethod
    def failure(cls, region: str, error: str, kind: FailureKind | None = None) -> RegionQueryResult:
        return cls(region=region, error=error, failure_kind=kind)

    @property
    def ok(self) -> bool:
        return self.vms is not None

    @property
    def rate_limited(self) -> bool:
        return self.failure_kind == FailureKind.RATE_LIMITED

    def find(self, vm_size: str) -> VmRecord | None:
        for vm in self.vms or ():
            if vm.name == vm_size:
                return vm
        return None


class AvailabilityEntry(AzSizeModel):
    """One region of an aggregated, price-ordered availability report."""

    region: str
    label: str | None = None
    price: float | None = None
    vcpus: int | None = Field(default=None, alias="vCPUs")
    memory_gb: float | None = Field(default=None, alias="memoryGB")
    restriction: str = "None"


class ComparisonRow(AzSizeModel):
    region: str
    vm_size: str
    found: bool = False
    available: bool = False
    price: float | None = None
    restriction: str | None = None
    error: str | None = None


class HistoricalUsage(AzSizeModel):
    vm_size: str
    region: str
    days: int
    percentage: float | None = None
