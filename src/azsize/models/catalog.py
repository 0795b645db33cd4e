from __future__ import annotations

from azsize.models.common import AzSizeModel


class RegionInfo(AzSizeModel):
    value: str
    label: str


class SeriesInfo(AzSizeModel):
    value: str
    label: str
