"""Pure post-processing of fan-out results."""

from __future__ import annotations

import math
from collections.abc import Callable, Sequence

from azsize.errors import InvalidArgumentError
from azsize.models.availability import AvailabilityEntry, ComparisonRow, RegionQueryResult

UNKNOWN_PRICE_SORT_KEY = math.inf

LabelLookup = Callable[[str], str | None]


def price_sort_key(entry: AvailabilityEntry) -> float:
    return entry.price if entry.price is not None else UNKNOWN_PRICE_SORT_KEY


def _validate(vm_size: str, limit: int | None) -> None:
    if not vm_size or not vm_size.strip():
        raise InvalidArgumentError("VM size must not be empty")
    if limit is not None and limit <= 0:
        raise InvalidArgumentError("limit must be a positive integer")


def aggregate_availability(
    results: Sequence[RegionQueryResult],
    vm_size: str,
    *,
    limit: int | None = None,
    labels: LabelLookup | None = None,
) -> list[AvailabilityEntry]:
    """Regions where ``vm_size`` is available, cheapest first.

    Failed regions, regions without the size and regions where it is
    restricted are left out. Entries without a price sort after every priced
    entry; ties keep the input region order.
    """

    _validate(vm_size, limit)

    entries: list[AvailabilityEntry] = []
    for result in results:
        vm = result.find(vm_size)
        if vm is None or not vm.available:
            continue
        entries.append(
            AvailabilityEntry(
                region=result.region,
                label=labels(result.region) if labels else None,
                price=vm.price_per_month,
                vcpus=vm.vcpus,
                memory_gb=vm.memory_gb,
                restriction=vm.restriction or "None",
            )
        )

    entries.sort(key=price_sort_key)
    if limit is not None:
        return entries[:limit]
    return entries


def compare_rows(results: Sequence[RegionQueryResult], vm_size: str) -> list[ComparisonRow]:
    """One row per queried region, in query order."""

    _validate(vm_size, None)

    rows: list[ComparisonRow] = []
    for result in results:
        if not result.ok:
            rows.append(ComparisonRow(region=result.region, vm_size=vm_size, error=result.error))
            continue
        vm = result.find(vm_size)
        if vm is None:
            rows.append(ComparisonRow(region=result.region, vm_size=vm_size))
            continue
        rows.append(
            ComparisonRow(
                region=result.region,
                vm_size=vm_size,
                found=True,
                available=vm.available,
                price=vm.price_per_month,
                restriction=vm.restriction,
            )
        )
    return rows


def available_count(rows: Sequence[ComparisonRow]) -> int:
    return sum(1 for row in rows if row.found and row.available)


def price_range(entries: Sequence[AvailabilityEntry]) -> tuple[AvailabilityEntry, AvailabilityEntry] | None:
    """Cheapest and most expensive entries with a known price."""

    priced = [entry for entry in entries if entry.price is not None]
    if not priced:
        return None
    return min(priced, key=price_sort_key), max(priced, key=price_sort_key)
