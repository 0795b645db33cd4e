"""Unified sync/async azsize client.

Sync methods use plain names.
Async methods use an `a` prefix.
"""

from __future__ import annotations

import asyncio
from collections.abc import Sequence
from typing import Any

from azsize.client.async_client import AsyncAzSizeClient
from azsize.models import CheckResult, ComparisonReport, FindReport, RegionQueryResult


class _SyncRunner:
    """Persistent sync runner to keep all sync calls on a single event loop."""

    def __init__(self) -> None:
        self._runner = asyncio.Runner()
        self._closed = False

    def run(self, coro: Any) -> Any:
        if self._closed:
            coro.close()
            raise RuntimeError("sync client is closed")

        try:
            asyncio.get_running_loop()
        except RuntimeError:
            return self._runner.run(coro)

        coro.close()
        raise RuntimeError("sync client methods cannot run inside an active event loop")

    def close(self) -> None:
        if self._closed:
            return

        self._runner.close()
        self._closed = True


class _SyncAPIProxy:
    def __init__(self, target: Any, run_sync: Any) -> None:
        self._target = target
        self._run_sync = run_sync

    def __getattr__(self, item: str) -> Any:
        attr = getattr(self._target, item)
        if not callable(attr):
            return attr

        def wrapper(*args: Any, **kwargs: Any) -> Any:
            return self._run_sync(attr(*args, **kwargs))

        return wrapper


class AzSizeClient:
    """Unified azsize client exposing both sync and async methods."""

    def __init__(self, *args: Any, **kwargs: Any) -> None:
        self._sync_runner = _SyncRunner()
        self._closed = False
        self._async = AsyncAzSizeClient(*args, **kwargs)

        # Sync grouped API surfaces.
        self.availability = _SyncAPIProxy(self._async.availability, self._sync_runner.run)
        self.history = _SyncAPIProxy(self._async.history, self._sync_runner.run)

        # Native async grouped surfaces.
        self.aavailability = self._async.availability
        self.ahistory = self._async.history

    @property
    def authenticated(self) -> bool:
        return self._async.authenticated

    @property
    def config(self):
        return self._async.config

    # Core helpers -------------------------------------------------------------

    def query_regions(self, regions: Sequence[str], series_filter: str) -> list[RegionQueryResult]:
        return self._sync_runner.run(self._async.query_regions(regions, series_filter))

    async def aquery_regions(self, regions: Sequence[str], series_filter: str) -> list[RegionQueryResult]:
        return await self._async.query_regions(regions, series_filter)

    def check(self, vm_size: str, region: str, *, history: bool = True) -> CheckResult:
        return self._sync_runner.run(self._async.check(vm_size, region, history=history))

    async def acheck(self, vm_size: str, region: str, *, history: bool = True) -> CheckResult:
        return await self._async.check(vm_size, region, history=history)

    def compare(self, vm_size: str, regions: Sequence[str]) -> ComparisonReport:
        return self._sync_runner.run(self._async.compare(vm_size, regions))

    async def acompare(self, vm_size: str, regions: Sequence[str]) -> ComparisonReport:
        return await self._async.compare(vm_size, regions)

    def find(
        self,
        vm_size: str,
        *,
        regions: Sequence[str] | None = None,
        limit: int | None = None,
    ) -> FindReport:
        return self._sync_runner.run(self._async.find(vm_size, regions=regions, limit=limit))

    async def afind(
        self,
        vm_size: str,
        *,
        regions: Sequence[str] | None = None,
        limit: int | None = None,
    ) -> FindReport:
        return await self._async.find(vm_size, regions=regions, limit=limit)

    # Lifecycle ----------------------------------------------------------------

    async def aclose(self) -> None:
        if self._closed:
            return

        await self._async.aclose()
        self._sync_runner.close()
        self._closed = True

    def close(self) -> None:
        if self._closed:
            return

        try:
            self._sync_runner.run(self._async.aclose())
        finally:
            self._sync_runner.close()
            self._closed = True

    async def __aenter__(self) -> AzSizeClient:
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.aclose()

    def __enter__(self) -> AzSizeClient:
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()
