"""Concurrent per-region availability queries."""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Awaitable, Callable, Sequence

from pydantic import ValidationError

from azsize.errors import (
    APIError,
    AzSizeError,
    InvalidArgumentError,
    MalformedResponseError,
    RateLimitError,
    RequestTimeoutError,
)
from azsize.models.availability import FailureKind, RegionQueryResult, VmRecord

logger = logging.getLogger(__name__)

QueryRegion = Callable[[str, str], Awaitable[Sequence[VmRecord]]]


def failure_kind(exc: BaseException) -> FailureKind:
    if isinstance(exc, RateLimitError):
        return FailureKind.RATE_LIMITED
    if isinstance(exc, (RequestTimeoutError, TimeoutError)):
        return FailureKind.TIMEOUT
    if isinstance(exc, (MalformedResponseError, ValidationError)):
        return FailureKind.MALFORMED
    if isinstance(exc, APIError):
        return FailureKind.HTTP
    return FailureKind.NETWORK


def _failure_message(exc: BaseException, timeout: float | None) -> str:
    if isinstance(exc, TimeoutError) and not isinstance(exc, AzSizeError) and timeout is not None:
        return f"query timed out after {timeout:g}s"
    return str(exc) or exc.__class__.__name__


async def fan_out(
    regions: Sequence[str],
    series_filter: str,
    query_region: QueryRegion,
    *,
    timeout: float | None = None,
) -> list[RegionQueryResult]:
    """Query every region concurrently and return one result per input region.

    The output keeps the input order, duplicates included. A region whose
    query raises (or exceeds ``timeout`` seconds) gets an ``error`` result;
    other regions are unaffected and the call itself does not raise for it.
    Empty region names and an empty series filter are rejected up front with
    ``InvalidArgumentError``.

    Example:
        >>> results = await fan_out(["eastus", "westus2"], "Standard_D", client.availability.check)
        >>> [r.region for r in results]
        ['eastus', 'westus2']
    """

    if not series_filter:
        raise InvalidArgumentError("series filter must not be empty")
    if timeout is not None and timeout <= 0:
        raise InvalidArgumentError("timeout must be positive")
    if any(not region or not region.strip() for region in regions):
        raise InvalidArgumentError("region must not be empty")

    results: list[RegionQueryResult | None] = [None] * len(regions)
    if not regions:
        return []

    async def run_one(index: int, region: str) -> None:
        try:
            if timeout is None:
                vms = await query_region(region, series_filter)
            else:
                vms = await asyncio.wait_for(query_region(region, series_filter), timeout)
            result = RegionQueryResult.success(region, list(vms))
        except Exception as exc:
            kind = failure_kind(exc)
            logger.info("region %s failed (%s): %s", region, kind, exc)
            results[index] = RegionQueryResult.failure(region, _failure_message(exc, timeout), kind)
            return

        logger.debug("region %s returned %d VM records", region, len(result.vms or ()))
        results[index] = result

    await asyncio.gather(*(run_one(index, region) for index, region in enumerate(regions)))
    return [result for result in results if result is not None]
