from __future__ import annotations

import logging

from azsize.constants import DEFAULT_HISTORY_DAYS
from azsize.errors import RequestError
from azsize.models.availability import HistoricalUsage
from azsize.services.base import ServiceBase

logger = logging.getLogger(__name__)

HISTORY_PATH = "/GetHistoricalData"


class HistoryService(ServiceBase):
    """Historical availability percentage for a VM size."""

    async def get(self, vm_size: str, region: str, *, days: int = DEFAULT_HISTORY_DAYS) -> HistoricalUsage:
        # History is not tracked for every size; a failed lookup yields an empty value.
        usage = HistoricalUsage(vm_size=vm_size, region=region, days=days)
        try:
            data = await self._client._get_json(
                HISTORY_PATH,
                params={"vmSize": vm_size, "region": region, "days": days, "type": "percentage"},
            )
        except RequestError as exc:
            logger.debug("no historical data for %s in %s: %s", vm_size, region, exc)
            return usage

        value = data.get("data")
        if isinstance(value, (int, float)) and not isinstance(value, bool):
            usage.percentage = float(value)
        return usage
