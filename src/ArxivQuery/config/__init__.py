from __future__ import annotations

"""Public configuration API for ArxivQuery."""

from ArxivQuery.config.api import ApiConfig
from ArxivQuery.config.app import (
    BUILTIN_DEFAULTS,
    DEFAULT_CONFIG_PATH,
    AppConfig,
    default_config,
    load_config,
    load_config_with_defaults,
    merge_config_dicts,
    parse_config_dict,
    parse_yaml,
)
from ArxivQuery.config.request import RequestDefaults
from ArxivQuery.config.runtime import RuntimeConfig

__all__ = [
    "AppConfig",
    "ApiConfig",
    "RequestDefaults",
    "RuntimeConfig",
    "BUILTIN_DEFAULTS",
    "DEFAULT_CONFIG_PATH",
    "default_config",
    "load_config",
    "load_config_with_defaults",
    "merge_config_dicts",
    "parse_config_dict",
    "parse_yaml",
]
