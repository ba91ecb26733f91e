from __future__ import annotations

"""Public configuration API for FacetQuery."""

from FacetQuery.config.app import (
    AppConfig,
    load_config,
    load_config_with_defaults,
    load_options_file,
    merge_config_dicts,
    parse_config_dict,
)
from FacetQuery.config.compile import CompileConfig
from FacetQuery.config.runtime import RuntimeConfig

__all__ = [
    "RuntimeConfig",
    "CompileConfig",
    "AppConfig",
    "load_config",
    "load_config_with_defaults",
    "load_options_file",
    "merge_config_dicts",
    "parse_config_dict",
]
