from __future__ import annotations

from pathlib import Path

from pydantic import AliasChoices, Field, SecretStr
from pydantic_settings import BaseSettings, SettingsConfigDict


class RuntimeSettings(BaseSettings):
    """Environment-driven runtime overrides for client resolution."""

    model_config = SettingsConfigDict(
        env_prefix="AZSIZE_",
        extra="ignore",
        populate_by_name=True,
        case_sensitive=False,
    )

    config_file: Path | None = Field(
        default=None,
        validation_alias=AliasChoices("AZSIZE_CONFIG", "AZSIZE_CONFIG_FILE"),
    )
    api_key: SecretStr | None = Field(default=None, validation_alias=AliasChoices("AZSIZE_API_KEY"))
    base_url: str | None = Field(default=None, validation_alias=AliasChoices("AZSIZE_BASE_URL"))
    request_timeout_seconds: float | None = Field(
        default=None,
        validation_alias=AliasChoices("AZSIZE_REQUEST_TIMEOUT_SECONDS"),
    )
    query_timeout_seconds: float | None = Field(
        default=None,
        validation_alias=AliasChoices("AZSIZE_QUERY_TIMEOUT_SECONDS"),
    )
    verify_ssl: bool | None = Field(default=None, validation_alias=AliasChoices("AZSIZE_VERIFY_SSL"))
