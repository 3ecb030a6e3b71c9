"""
Adapters from loosely-typed host configuration to ConfigurationSources.
"""
import logging
import os
from typing import Any, Dict, Mapping, Optional

import yaml

from .aliases import AliasTable
from .errors import ConfigLoadError
from .types import ConfigFileView, ConfigurationSources, EnvironmentView

logger = logging.getLogger(__name__)


def expand_endpoints(raw: Any) -> Dict[str, str]:
    """Convert the declarative ``endpoints`` block into a key -> endpoint map.

    The host framework hands over a list holding one mapping; a bare mapping
    or None is accepted too. Non-string and empty values are treated as unset.
    When several mappings are present the first non-empty value per key wins.
    """
    if not raw:
        return {}
    if isinstance(raw, Mapping):
        raw = [raw]
    if not isinstance(raw, (list, tuple)):
        logger.debug(f"Ignoring endpoints block of type {type(raw).__name__}")
        return {}

    endpoints: Dict[str, str] = {}
    for item in raw:
        if not isinstance(item, Mapping):
            continue
        for key, value in item.items():
            if not isinstance(value, str) or not value:
                continue
            endpoints.setdefault(str(key), value)
    return endpoints


def collect_sources(
    table: AliasTable,
    endpoints: Any = None,
    environ: Optional[Mapping[str, str]] = None,
    config_file: Optional[Mapping[str, Any]] = None,
) -> ConfigurationSources:
    """Build the source bundle for one pass from raw host inputs."""
    return ConfigurationSources(
        explicit=expand_endpoints(endpoints),
        environment=EnvironmentView.from_environ(table, environ),
        config_file=ConfigFileView.from_mapping(config_file) if config_file is not None else None,
    )


def load_sources_from_yaml(
    path: str,
    table: AliasTable,
    environ: Optional[Mapping[str, str]] = None,
) -> ConfigurationSources:
    """Read an application YAML file with ``endpoints`` and ``config_file`` sections."""
    if not os.path.exists(path):
        msg = f"Config file not found: {path}"
        logger.error(msg)
        raise FileNotFoundError(msg)

    try:
        with open(path, 'r', encoding='utf-8') as f:
            data = yaml.safe_load(f) or {}
    except yaml.YAMLError as e:
        logger.error(f"YAML parsing error in {path}: {e}")
        raise ConfigLoadError(path, e) from e

    if not isinstance(data, dict):
        raise ConfigLoadError(path, ValueError("top-level document must be a mapping"))

    try:
        sources = collect_sources(
            table,
            endpoints=data.get("endpoints"),
            environ=environ,
            config_file=data.get("config_file"),
        )
    except ValueError as e:
        logger.error(f"Invalid endpoint configuration in {path}: {e}")
        raise ConfigLoadError(path, e) from e

    logger.debug(f"Loaded endpoint configuration from {path}")
    return sources
