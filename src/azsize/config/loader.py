from __future__ import annotations

import json
import logging
import os
import tomllib
from pathlib import Path
from typing import Any

import tomli_w
import yaml

from azsize.config.models import AzSizeConfig, ConfigInput, ResolvedConfig
from azsize.constants import DEFAULT_CONFIG_DIR
from azsize.errors import ConfigError

logger = logging.getLogger(__name__)

CONFIG_PATH_ENVS = ("AZSIZE_CONFIG", "AZSIZE_CONFIG_FILE")


def _default_config_dir() -> Path:
    return Path(DEFAULT_CONFIG_DIR).expanduser()


def default_config_candidates() -> list[Path]:
    base = _default_config_dir()
    return [
        base / "config.json",
        base / "config.yml",
        base / "config.yaml",
        base / "config.toml",
    ]


def _decode_raw(raw: str, *, suffix: str) -> dict[str, Any]:
    if suffix in {".yaml", ".yml"}:
        parsed = yaml.safe_load(raw) or {}
    elif suffix == ".toml":
        parsed = tomllib.loads(raw)
    else:
        # JSON is the historical format; empty files are treated as empty maps.
        parsed = json.loads(raw) if raw.strip() else {}

    if not isinstance(parsed, dict):
        raise ConfigError("config must decode to an object/map")
    return parsed


def parse_config_file(path: Path) -> dict[str, Any]:
    suffix = path.suffix.lower()
    raw = path.read_text(encoding="utf-8")
    return _decode_raw(raw, suffix=suffix)


def _load_from_path(path: Path, *, source: str) -> ResolvedConfig:
    try:
        payload = parse_config_file(path)
    except (OSError, ValueError, yaml.YAMLError) as exc:
        raise ConfigError(f"failed to parse config file '{path}': {exc}") from exc

    try:
        data = AzSizeConfig.model_validate(payload)
    except ValueError as exc:
        raise ConfigError(f"invalid config structure for '{path}': {exc}") from exc

    logger.debug("loaded config from %s (%s)", path, source)
    return ResolvedConfig(source=source, path=path.resolve(), data=data)


def load_config(
    config: ConfigInput | str | Path | None = None,
    *,
    config_path: str | Path | None = None,
) -> ResolvedConfig:
    """Load and validate azsize configuration.

    Precedence: runtime object/dict, explicit path, ``AZSIZE_CONFIG`` env
    paths, then the default candidates under ``~/.azsize``. A missing file is
    not an error; it resolves to defaults with the path remembered for saves.
    """

    if isinstance(config, (str, Path)) and config_path is None:
        config_path = config
        config = None

    if config is not None:
        if isinstance(config, AzSizeConfig):
            return ResolvedConfig(source="runtime-model", data=config)
        return ResolvedConfig(source="runtime-dict", data=AzSizeConfig.model_validate(config))

    if config_path is not None:
        path = Path(config_path).expanduser().resolve()
        if not path.exists():
            return ResolvedConfig(source="explicit-path-missing", path=path, data=AzSizeConfig())
        return _load_from_path(path, source="explicit-path")

    for env_name in CONFIG_PATH_ENVS:
        env_path = os.getenv(env_name)
        if not env_path:
            continue
        path = Path(env_path).expanduser().resolve()
        if not path.exists():
            return ResolvedConfig(source=f"env:{env_name}:missing", path=path, data=AzSizeConfig())
        return _load_from_path(path, source=f"env:{env_name}")

    for candidate in default_config_candidates():
        if candidate.exists():
            return _load_from_path(candidate.expanduser().resolve(), source="default-path")

    return ResolvedConfig(
        source="default-empty",
        path=default_config_candidates()[0].expanduser().resolve(),
        data=AzSizeConfig(),
    )


def config_payload(config: AzSizeConfig) -> dict[str, Any]:
    """Plain mapping written to disk, with the API key in clear text."""

    payload = config.model_dump(mode="json", exclude_none=True)
    if config.api_key is not None:
        payload["api_key"] = config.api_key.get_secret_value()
    return payload


def save_config(config: AzSizeConfig, *, path: Path | None = None) -> Path:
    target = (path or default_config_candidates()[0]).expanduser()
    suffix = target.suffix.lower()

    payload = config_payload(config)
    if suffix in {"", ".json"}:
        rendered = json.dumps(payload, indent=2) + "\n"
    elif suffix in {".yaml", ".yml"}:
        rendered = yaml.safe_dump(payload, sort_keys=False)
    elif suffix == ".toml":
        rendered = tomli_w.dumps(payload)
    else:
        raise ConfigError(f"unsupported config extension: {suffix}")

    try:
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_text(rendered, encoding="utf-8")
        target.chmod(0o600)
    except OSError as exc:
        raise ConfigError(f"failed to write config file '{target}': {exc}") from exc
    return target.resolve()
