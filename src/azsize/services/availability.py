from __future__ import annotations

from pydantic import ValidationError

from azsize.errors import InvalidArgumentError, MalformedResponseError
from azsize.models.availability import AvailabilityResponse, VmRecord
from azsize.services.base import ServiceBase

AVAILABILITY_PATH = "/GetVMAvailability"


class AvailabilityService(ServiceBase):
    """Single-region VM availability lookups."""

    async def check(self, region: str, series_filter: str) -> list[VmRecord]:
        """Return every VM record of ``series_filter`` the API reports for ``region``.

        Raises a ``RequestError`` subclass on transport, HTTP or payload failure.
        """

        if not region:
            raise InvalidArgumentError("region must not be empty")
        if not series_filter:
            raise InvalidArgumentError("series filter must not be empty")

        data = await self._client._get_json(
            AVAILABILITY_PATH,
            params={"region": region, "seriesFilter": series_filter},
        )
        try:
            response = AvailabilityResponse.model_validate(data)
        except ValidationError as exc:
            raise MalformedResponseError(
                f"unexpected availability payload for {region}: {exc.error_count()} invalid field(s)"
            ) from exc
        return response.vms

    async def find(self, vm_size: str, region: str, series_filter: str) -> VmRecord | None:
        for vm in await self.check(region, series_filter):
            if vm.name == vm_size:
                return vm
        return None
