from __future__ import annotations

from pathlib import Path
from typing import Any

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, SecretStr, field_validator

from azsize.constants import (
    DEFAULT_BASE_URL,
    DEFAULT_COMPARE_REGIONS,
    DEFAULT_REGION,
    DEFAULT_SERIES_FILTER,
)


class AzSizeConfig(BaseModel):
    """Contents of the local azsize config file."""

    model_config = ConfigDict(extra="allow", populate_by_name=True)

    api_key: SecretStr | None = Field(default=None, validation_alias=AliasChoices("api_key", "apiKey"))
    base_url: str = Field(default=DEFAULT_BASE_URL, validation_alias=AliasChoices("base_url", "baseUrl"))
    request_timeout_seconds: float = Field(
        default=30.0,
        validation_alias=AliasChoices("request_timeout_seconds", "requestTimeoutSeconds"),
    )
    query_timeout_seconds: float | None = Field(
        default=None,
        validation_alias=AliasChoices("query_timeout_seconds", "queryTimeoutSeconds"),
    )
    verify_ssl: bool = Field(default=True, validation_alias=AliasChoices("verify_ssl", "verifySsl"))
    default_region: str = Field(
        default=DEFAULT_REGION,
        validation_alias=AliasChoices("default_region", "defaultRegion", "region"),
    )
    compare_regions: list[str] = Field(
        default_factory=lambda: list(DEFAULT_COMPARE_REGIONS),
        validation_alias=AliasChoices("compare_regions", "compareRegions"),
    )
    default_series_filter: str = Field(
        default=DEFAULT_SERIES_FILTER,
        validation_alias=AliasChoices("default_series_filter", "defaultSeriesFilter"),
    )

    @field_validator("compare_regions", mode="before")
    @classmethod
    def _split_regions(cls, value: object) -> object:
        if isinstance(value, str):
            return [part.strip() for part in value.split(",") if part.strip()]
        return value

    @field_validator("api_key", mode="before")
    @classmethod
    def _blank_key_is_none(cls, value: object) -> object:
        if isinstance(value, str) and not value.strip():
            return None
        return value


class ResolvedConfig(BaseModel):
    model_config = ConfigDict(extra="forbid")

    source: str
    path: Path | None = None
    data: AzSizeConfig


ConfigInput = AzSizeConfig | dict[str, Any]
