from __future__ import annotations

from pathlib import Path

from pydantic import SecretStr

from azsize.auth import validate_api_key
from azsize.config.loader import default_config_candidates, load_config, save_config
from azsize.config.models import AzSizeConfig


class CredentialStore:
    """Read and write the API key kept in the local azsize config file."""

    def __init__(self, config_file: str | Path | None = None) -> None:
        self._explicit = config_file is not None
        raw = Path(config_file).expanduser() if config_file else default_config_candidates()[0].expanduser()
        self._path = raw

    @property
    def path(self) -> Path:
        return self._path

    def load(self) -> AzSizeConfig:
        if self._explicit:
            resolved = load_config(config_path=self._path)
        else:
            resolved = load_config()
            if resolved.path is not None:
                self._path = resolved.path
        return resolved.data

    def save(self, config: AzSizeConfig) -> None:
        self._path = save_config(config, path=self._path)

    def get_api_key(self) -> str | None:
        secret = self.load().api_key
        if secret is None:
            return None
        return secret.get_secret_value() or None

    def has_api_key(self) -> bool:
        return self.get_api_key() is not None

    def set_api_key(self, api_key: str) -> AzSizeConfig:
        key = validate_api_key(api_key)
        cfg = self.load()
        cfg.api_key = SecretStr(key)
        self.save(cfg)
        return cfg

    def clear_api_key(self) -> bool:
        """Remove the stored key; returns False when there was nothing to remove."""

        cfg = self.load()
        if cfg.api_key is None:
            return False
        cfg.api_key = None
        self.save(cfg)
        return True
