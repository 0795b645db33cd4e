"""Static catalog of Azure regions and VM series known to the azsize API."""

from __future__ import annotations

import re

from azsize.constants import DEFAULT_SERIES_FILTER
from azsize.models.catalog import RegionInfo, SeriesInfo

_SERIES_RE = re.compile(r"^(Standard_[A-Z])")


def _regions(*pairs: tuple[str, str]) -> tuple[RegionInfo, ...]:
    return tuple(RegionInfo(value=value, label=label) for value, label in pairs)


AZURE_REGIONS: tuple[RegionInfo, ...] = _regions(
    ("eastus", "East US"),
    ("eastus2", "East US 2"),
    ("westus", "West US"),
    ("westus2", "West US 2"),
    ("westus3", "West US 3"),
    ("centralus", "Central US"),
    ("northcentralus", "North Central US"),
    ("southcentralus", "South Central US"),
    ("westcentralus", "West Central US"),
    ("canadacentral", "Canada Central"),
    ("canadaeast", "Canada East"),
    ("brazilsouth", "Brazil South"),
    ("northeurope", "North Europe"),
    ("westeurope", "West Europe"),
    ("uksouth", "UK South"),
    ("ukwest", "UK West"),
    ("francecentral", "France Central"),
    ("francesouth", "France South"),
    ("germanywestcentral", "Germany West Central"),
    ("norwayeast", "Norway East"),
    ("switzerlandnorth", "Switzerland North"),
    ("swedencentral", "Sweden Central"),
    ("southafricanorth", "South Africa North"),
    ("uaenorth", "UAE North"),
    ("southeastasia", "Southeast Asia"),
    ("eastasia", "East Asia"),
    ("australiaeast", "Australia East"),
    ("australiasoutheast", "Australia Southeast"),
    ("centralindia", "Central India"),
    ("southindia", "South India"),
    ("westindia", "West India"),
    ("japaneast", "Japan East"),
    ("japanwest", "Japan West"),
    ("koreacentral", "Korea Central"),
    ("koreasouth", "Korea South"),
    ("chinanorth", "China North"),
    ("chinaeast", "China East"),
    ("chinanorth2", "China North 2"),
    ("chinaeast2", "China East 2"),
    ("germanycentral", "Germany Central"),
    ("germanynortheast", "Germany Northeast"),
    ("usgovvirginia", "US Gov Virginia"),
    ("usgoviowa", "US Gov Iowa"),
    ("usgovarizona", "US Gov Arizona"),
    ("usgovtexas", "US Gov Texas"),
    ("usdodeast", "US DoD East"),
    ("usdodcentral", "US DoD Central"),
    ("qatarcentral", "Qatar Central"),
    ("polandcentral", "Poland Central"),
)

VM_SERIES: tuple[SeriesInfo, ...] = (
    SeriesInfo(value="Standard_A", label="A-series (Basic)"),
    SeriesInfo(value="Standard_B", label="B-series (Burstable)"),
    SeriesInfo(value="Standard_D", label="D-series (General Purpose)"),
    SeriesInfo(value="Standard_E", label="E-series (Memory Optimized)"),
    SeriesInfo(value="Standard_F", label="F-series (Compute Optimized)"),
    SeriesInfo(value="Standard_G", label="G-series (Memory & Storage)"),
    SeriesInfo(value="Standard_H", label="H-series (HPC)"),
    SeriesInfo(value="Standard_L", label="L-series (Storage Optimized)"),
    SeriesInfo(value="Standard_M", label="M-series (Large Memory)"),
    SeriesInfo(value="Standard_N", label="N-series (GPU)"),
)

_REGION_LABELS = {region.value: region.label for region in AZURE_REGIONS}


def region_names() -> list[str]:
    return [region.value for region in AZURE_REGIONS]


def region_label(region: str) -> str | None:
    return _REGION_LABELS.get(region)


def series_filter_for(vm_size: str, *, default: str = DEFAULT_SERIES_FILTER) -> str:
    """Derive the API series filter (``Standard_<letter>``) for a VM size.

    Sizes that do not follow the ``Standard_<letter>...`` naming fall back to
    ``default``; the lookup then usually finds nothing for that size.

    Example:
        >>> series_filter_for("Standard_E8s_v5")
        'Standard_E'
    """

    match = _SERIES_RE.match(vm_size)
    return match.group(1) if match else default


def split_regions(values: list[str] | str | None) -> list[str]:
    """Flatten repeatable and comma-separated region flags, keeping order and duplicates."""

    if not values:
        return []
    if isinstance(values, str):
        values = [values]
    output: list[str] = []
    for raw in values:
        for part in raw.split(","):
            token = part.strip()
            if token:
                output.append(token)
    return output
