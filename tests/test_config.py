from __future__ import annotations

import json
import stat
from pathlib import Path

import pytest
import yaml

from azsize.config import AzSizeConfig, CredentialStore, load_config, save_config
from azsize.errors import ConfigError


def test_runtime_dict_precedence_over_paths(tmp_path: Path) -> None:
    path = tmp_path / "config.yml"
    path.write_text(yaml.safe_dump({"default_region": "westeurope"}), encoding="utf-8")

    cfg = load_config({"default_region": "japaneast"}, config_path=path)

    assert cfg.source == "runtime-dict"
    assert cfg.data.default_region == "japaneast"


def test_explicit_path_precedence_over_env(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    env_path = tmp_path / "env.json"
    env_path.write_text(json.dumps({"default_region": "uksouth"}), encoding="utf-8")
    explicit_path = tmp_path / "explicit.toml"
    explicit_path.write_text('default_region = "swedencentral"\n', encoding="utf-8")

    monkeypatch.setenv("AZSIZE_CONFIG", str(env_path))
    cfg = load_config(config_path=explicit_path)

    assert cfg.source == "explicit-path"
    assert cfg.data.default_region == "swedencentral"


def test_env_fallback(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    env_path = tmp_path / "env.yml"
    env_path.write_text(yaml.safe_dump({"compare_regions": "eastus, westus"}), encoding="utf-8")
    monkeypatch.setenv("AZSIZE_CONFIG", str(env_path))

    cfg = load_config()

    assert cfg.source == "env:AZSIZE_CONFIG"
    assert cfg.data.compare_regions == ["eastus", "westus"]


def test_default_path_reads_legacy_camel_case_file(isolated_env: Path) -> None:
    path = isolated_env / ".azsize" / "config.json"
    path.parent.mkdir()
    path.write_text(json.dumps({"apiKey": "azsk_legacy"}), encoding="utf-8")

    cfg = load_config()

    assert cfg.source == "default-path"
    assert cfg.data.api_key is not None
    assert cfg.data.api_key.get_secret_value() == "azsk_legacy"


def test_missing_files_resolve_to_defaults(tmp_path: Path) -> None:
    cfg = load_config()
    assert cfg.source == "default-empty"
    assert cfg.data.api_key is None
    assert cfg.data.default_series_filter == "Standard_D"

    missing = load_config(config_path=tmp_path / "nope.json")
    assert missing.source == "explicit-path-missing"


def test_invalid_file_raises_config_error(tmp_path: Path) -> None:
    path = tmp_path / "config.json"
    path.write_text("{not json", encoding="utf-8")

    with pytest.raises(ConfigError, match="failed to parse config file"):
        load_config(config_path=path)


def test_save_config_writes_secret_with_private_permissions(tmp_path: Path) -> None:
    path = tmp_path / "nested" / "config.json"
    cfg = AzSizeConfig.model_validate({"api_key": "azsk_secret"})

    saved = save_config(cfg, path=path)

    assert json.loads(saved.read_text(encoding="utf-8"))["api_key"] == "azsk_secret"
    assert stat.S_IMODE(saved.stat().st_mode) == 0o600


def test_save_config_rejects_unknown_extension(tmp_path: Path) -> None:
    with pytest.raises(ConfigError, match="unsupported config extension"):
        save_config(AzSizeConfig(), path=tmp_path / "config.ini")


def test_credential_store_round_trip(tmp_path: Path) -> None:
    store = CredentialStore(tmp_path / "config.json")
    assert store.get_api_key() is None
    assert not store.clear_api_key()

    store.set_api_key(" azsk_0123456789 ")

    assert store.has_api_key()
    assert CredentialStore(tmp_path / "config.json").get_api_key() == "azsk_0123456789"
    assert store.clear_api_key()
    assert store.get_api_key() is None


def test_credential_store_rejects_invalid_key(tmp_path: Path) -> None:
    store = CredentialStore(tmp_path / "config.json")

    with pytest.raises(ConfigError, match="azsk_"):
        store.set_api_key("sk_live_nope")
    assert not (tmp_path / "config.json").exists()


def test_credential_store_defaults_to_home_directory(isolated_env: Path) -> None:
    store = CredentialStore()
    store.set_api_key("azsk_home")

    assert store.path == (isolated_env / ".azsize" / "config.json").resolve()
    assert store.get_api_key() == "azsk_home"
