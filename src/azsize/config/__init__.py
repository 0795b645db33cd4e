from azsize.config.loader import (
    CONFIG_PATH_ENVS,
    config_payload,
    default_config_candidates,
    load_config,
    save_config,
)
from azsize.config.models import AzSizeConfig, ConfigInput, ResolvedConfig
from azsize.config.store import CredentialStore

__all__ = [
    "CONFIG_PATH_ENVS",
    "AzSizeConfig",
    "ConfigInput",
    "CredentialStore",
    "ResolvedConfig",
    "config_payload",
    "default_config_candidates",
    "load_config",
    "save_config",
]
