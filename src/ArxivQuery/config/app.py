from __future__ import annotations

"""Application config orchestration and YAML loading entrypoints."""

from dataclasses import dataclass
from pathlib import Path
from typing import Any, Mapping

import yaml

from ArxivQuery.config.api import ApiConfig, check_api, load_api
from ArxivQuery.config.request import RequestDefaults, check_request_defaults, load_request_defaults
from ArxivQuery.config.runtime import RuntimeConfig, check_runtime, load_runtime

DEFAULT_CONFIG_PATH = Path("config/default.yml")

# Used when no config file is present.
BUILTIN_DEFAULTS: Mapping[str, Any] = {
    "log": {"level": "INFO", "to_file": False, "dir": "log"},
    "api": {},
    "request": {"max_results": 10},
}


@dataclass(frozen=True, slots=True)
class AppConfig:
    """Application root configuration."""

    runtime: RuntimeConfig
    api: ApiConfig
    request: RequestDefaults


def parse_config_dict(raw: Mapping[str, Any]) -> AppConfig:
    """Parse and validate a config mapping into AppConfig.

    Raises:
        TypeError: If config types are invalid.
        ValueError: If required keys are missing or values are out of range.
    """
    runtime = load_runtime(raw)
    api = load_api(raw)
    request = load_request_defaults(raw)

    check_runtime(runtime)
    check_api(api)
    check_request_defaults(request)

    return AppConfig(runtime=runtime, api=api, request=request)


def default_config() -> AppConfig:
    """Return the built-in configuration."""
    return parse_config_dict(BUILTIN_DEFAULTS)


def load_config(path: Path) -> AppConfig:
    """Load one YAML config file without default merge."""
    return parse_config_dict(parse_yaml(path.read_text(encoding="utf-8")))


def load_config_with_defaults(
    config_path: Path,
    default_path: Path = DEFAULT_CONFIG_PATH,
) -> AppConfig:
    """Load `config_path` deep-merged over the defaults file."""
    base = parse_yaml(default_path.read_text(encoding="utf-8"))
    if config_path.resolve() == default_path.resolve():
        return parse_config_dict(base)
    override = parse_yaml(config_path.read_text(encoding="utf-8"))
    return parse_config_dict(merge_config_dicts(base, override))


def parse_yaml(text: str) -> dict[str, Any]:
    """Parse YAML text into a mapping; an empty document yields ``{}``."""
    data = yaml.safe_load(text) or {}
    if not isinstance(data, Mapping):
        raise ValueError("Config root must be a mapping/object")
    return dict(data)


def merge_config_dicts(base: Mapping[str, Any], override: Mapping[str, Any]) -> dict[str, Any]:
    """Deep-merge two config mappings; `override` wins on conflicts."""
    merged: dict[str, Any] = dict(base)
    for key, value in override.items():
        if key in merged and isinstance(merged[key], Mapping) and isinstance(value, Mapping):
            merged[key] = merge_config_dicts(merged[key], value)
        else:
            merged[key] = value
    return merged
