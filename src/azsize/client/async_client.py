from __future__ import annotations

import logging
from collections.abc import Mapping, Sequence
from contextlib import asynccontextmanager
from pathlib import Path
from typing import Any

import httpx

from azsize.aggregate import aggregate_availability, compare_rows
from azsize.catalog import region_label, region_names, series_filter_for
from azsize.config import AzSizeConfig, ConfigInput, load_config
from azsize.constants import DEFAULT_HISTORY_DAYS
from azsize.errors import InvalidArgumentError
from azsize.fanout import fan_out
from azsize.http import AzSizeTransport
from azsize.models import CheckResult, ComparisonReport, FindReport, RegionQueryResult, VmRecord
from azsize.services import AvailabilityService, HistoryService
from azsize.settings import RuntimeSettings

logger = logging.getLogger(__name__)

JsonObject = dict[str, Any]
RequestParams = Mapping[str, str | int | float | bool]


def _secret_to_str(value: object) -> str | None:
    if value is None:
        return None
    getter = getattr(value, "get_secret_value", None)
    if callable(getter):
        secret = getter()
        return str(secret) if secret else None
    raw = str(value)
    return raw if raw else None


def _require_vm_size(vm_size: str) -> str:
    if not vm_size or not vm_size.strip():
        raise InvalidArgumentError("VM size must not be empty")
    return vm_size.strip()


class AsyncAzSizeClient:
    """Async azsize API client.

    The API key is resolved once, at construction, from the explicit
    argument, ``AZSIZE_API_KEY`` or the config file (in that order) and handed
    to the transport. Nothing is re-read while the client is alive.

    Example:
        >>> import asyncio
        >>> from azsize.client import AsyncAzSizeClient
        >>> async def demo() -> None:
        ...     async with AsyncAzSizeClient() as client:
        ...         _ = await client.find("Standard_D4s_v5", limit=3)
        >>> asyncio.run(demo())
    """

    def __init__(
        self,
        config: ConfigInput | None = None,
        *,
        config_path: str | Path | None = None,
        api_key: str | None = None,
        base_url: str | None = None,
        request_timeout_seconds: float | None = None,
        query_timeout_seconds: float | None = None,
        verify_ssl: bool | None = None,
        default_series_filter: str | None = None,
        http_client: httpx.AsyncClient | None = None,
    ) -> None:
        self._runtime = RuntimeSettings()
        if config is None and config_path is None and self._runtime.config_file is not None:
            config_path = self._runtime.config_file
        resolved = load_config(config, config_path=config_path)
        self._resolved_config = resolved
        self.config: AzSizeConfig = resolved.data

        self._api_key = api_key or _secret_to_str(self._runtime.api_key) or _secret_to_str(self.config.api_key)
        self.base_url = base_url or self._runtime.base_url or self.config.base_url
        self.request_timeout_seconds = (
            request_timeout_seconds
            if request_timeout_seconds is not None
            else (
                self._runtime.request_timeout_seconds
                if self._runtime.request_timeout_seconds is not None
                else self.config.request_timeout_seconds
            )
        )
        self.query_timeout_seconds = (
            query_timeout_seconds
            if query_timeout_seconds is not None
            else (
                self._runtime.query_timeout_seconds
                if self._runtime.query_timeout_seconds is not None
                else self.config.query_timeout_seconds
            )
        )
        self.verify_ssl = (
            verify_ssl
            if verify_ssl is not None
            else (self._runtime.verify_ssl if self._runtime.verify_ssl is not None else self.config.verify_ssl)
        )
        self.default_series_filter = default_series_filter or self.config.default_series_filter

        self._transport = AzSizeTransport(
            base_url=self.base_url,
            timeout=self.request_timeout_seconds,
            verify_tls=self.verify_ssl,
            api_key=self._api_key,
            http_client=http_client,
        )
        logger.debug(
            "client ready base_url=%s authenticated=%s config=%s",
            self.base_url,
            self.authenticated,
            resolved.source,
        )

        self._availability: AvailabilityService | None = None
        self._history: HistoryService | None = None

    @property
    def authenticated(self) -> bool:
        return self._api_key is not None

    @property
    def config_source(self) -> str:
        return self._resolved_config.source

    @property
    def availability(self) -> AvailabilityService:
        if self._availability is None:
            self._availability = AvailabilityService(self)
        return self._availability

    @property
    def history(self) -> HistoryService:
        if self._history is None:
            self._history = HistoryService(self)
        return self._history

    async def __aenter__(self) -> AsyncAzSizeClient:
        return self

    async def __aexit__(self, exc_type: object, exc: object, tb: object) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self._transport.aclose()

    async def _get_json(self, path: str, *, params: RequestParams | None = None) -> JsonObject:
        return await self._transport.get_json(path, params=params)

    def series_filter_for(self, vm_size: str) -> str:
        return series_filter_for(vm_size, default=self.default_series_filter)

    async def query_regions(self, regions: Sequence[str], series_filter: str) -> list[RegionQueryResult]:
        """Fan the availability lookup out over ``regions``; see :func:`azsize.fanout.fan_out`."""

        return await fan_out(
            regions,
            series_filter,
            self.availability.check,
            timeout=self.query_timeout_seconds,
        )

    async def check(
        self,
        vm_size: str,
        region: str,
        *,
        history: bool = True,
        days: int = DEFAULT_HISTORY_DAYS,
    ) -> CheckResult:
        vm_size = _require_vm_size(vm_size)
        series_filter = self.series_filter_for(vm_size)
        vm: VmRecord | None = await self.availability.find(vm_size, region, series_filter)
        result = CheckResult(region=region, vm_size=vm_size, series_filter=series_filter, vm=vm)
        if vm is not None and history:
            usage = await self.history.get(vm_size, region, days=days)
            result.historical = usage.percentage
        return result

    async def compare(self, vm_size: str, regions: Sequence[str]) -> ComparisonReport:
        vm_size = _require_vm_size(vm_size)
        if not regions:
            raise InvalidArgumentError("at least one region is required to compare")
        series_filter = self.series_filter_for(vm_size)
        results = await self.query_regions(regions, series_filter)
        return ComparisonReport(
            vm_size=vm_size,
            series_filter=series_filter,
            results=results,
            rows=compare_rows(results, vm_size),
        )

    async def find(
        self,
        vm_size: str,
        *,
        regions: Sequence[str] | None = None,
        limit: int | None = None,
    ) -> FindReport:
        vm_size = _require_vm_size(vm_size)
        if limit is not None and limit <= 0:
            raise InvalidArgumentError("limit must be a positive integer")
        targets = list(regions) if regions else region_names()
        series_filter = self.series_filter_for(vm_size)

        results = await self.query_regions(targets, series_filter)
        available = aggregate_availability(results, vm_size, labels=region_label)
        shown = aggregate_availability(results, vm_size, limit=limit, labels=region_label) if limit else available
        return FindReport(
            vm_size=vm_size,
            series_filter=series_filter,
            total_regions=len(targets),
            limit=limit,
            available=available,
            regions=shown,
            results=results,
        )


@asynccontextmanager
async def connect(*args: Any, **kwargs: Any):
    client = AsyncAzSizeClient(*args, **kwargs)
    try:
        yield client
    finally:
        await client.aclose()
