"""
Service alias registry.

Maps each canonical service key to its ordered alias keys and the environment
variable names consulted for that service. The table is built once, validated
on construction and never mutated afterwards.
"""
import logging
import re
from dataclasses import dataclass
from functools import lru_cache
from importlib import resources
from typing import Any, Dict, Iterable, List, Optional, Tuple

import yaml

from .errors import AliasCollisionError, RegistryValidationError, ServiceNotFoundError

logger = logging.getLogger(__name__)

ENV_VAR_PREFIX = "AWS_ENDPOINT_URL"
BASE_ENV_VAR = ENV_VAR_PREFIX

_ENV_NAME_INVALID = re.compile(r"[^A-Za-z0-9]+")


def derive_env_name(key: str) -> str:
    """Upper-case a service key into its environment variable suffix."""
    return _ENV_NAME_INVALID.sub("_", key).strip("_").upper()


@dataclass(frozen=True)
class ServiceDefinition:
    """One logical service and the names it can be configured under."""
    key: str
    aliases: Tuple[str, ...]
    env_var: str
    tf_aws_env_var: Optional[str] = None
    deprecated_env_var: Optional[str] = None
    human_name: Optional[str] = None

    @classmethod
    def create(
        cls,
        key: str,
        aliases: Iterable[str] = (),
        env_name: Optional[str] = None,
        deprecated_env_vars: bool = False,
        tf_aws_env_var: Optional[str] = None,
        deprecated_env_var: Optional[str] = None,
        human_name: Optional[str] = None,
    ) -> "ServiceDefinition":
        suffix = env_name or derive_env_name(key)
        if deprecated_env_vars:
            tf_aws_env_var = tf_aws_env_var or f"TF_AWS_{suffix}_ENDPOINT"
            deprecated_env_var = deprecated_env_var or f"AWS_{suffix}_ENDPOINT"

        return cls(
            key=key,
            aliases=tuple(aliases),
            env_var=f"{ENV_VAR_PREFIX}_{suffix}",
            tf_aws_env_var=tf_aws_env_var,
            deprecated_env_var=deprecated_env_var,
            human_name=human_name,
        )

    @property
    def all_keys(self) -> Tuple[str, ...]:
        """Canonical key followed by aliases, in precedence order."""
        return (self.key,) + self.aliases

    @property
    def env_vars(self) -> Tuple[str, ...]:
        """Every per-service variable this service may read, in precedence order."""
        names = [self.env_var, self.tf_aws_env_var, self.deprecated_env_var]
        return tuple(name for name in names if name)


class AliasTable:
    """Read-only registry of canonical service keys and their aliases."""

    def __init__(self, definitions: Iterable[ServiceDefinition]):
        self._services: Dict[str, ServiceDefinition] = {}
        self._canonical: Dict[str, str] = {}

        for definition in definitions:
            self._register(definition)

        logger.debug(f"AliasTable built with {len(self._services)} services")

    def _register(self, definition: ServiceDefinition) -> None:
        if not isinstance(definition.key, str) or not definition.key:
            raise RegistryValidationError(f"Invalid service key: {definition.key!r}")

        for key in definition.all_keys:
            if not isinstance(key, str) or not key:
                raise RegistryValidationError(
                    f"Invalid alias {key!r} for service '{definition.key}'"
                )
            owner = self._canonical.get(key)
            if owner is not None:
                raise AliasCollisionError(key, [owner, definition.key])
            self._canonical[key] = definition.key

        self._services[definition.key] = definition

    # ========== Construction ==========

    @classmethod
    def from_definitions(cls, definitions: Iterable[ServiceDefinition]) -> "AliasTable":
        return cls(definitions)

    @classmethod
    def from_mapping(cls, data: Any) -> "AliasTable":
        """Build a table from parsed registry data (``{'services': {...}}``)."""
        if not isinstance(data, dict):
            raise RegistryValidationError("Service registry must be a mapping")

        services = data.get("services", data)
        if not isinstance(services, dict):
            raise RegistryValidationError("'services' must be a mapping of service keys")

        definitions: List[ServiceDefinition] = []
        for key, entry in services.items():
            entry = entry or {}
            if not isinstance(entry, dict):
                raise RegistryValidationError(f"Entry for service '{key}' must be a mapping")

            aliases = entry.get("aliases") or []
            if isinstance(aliases, str):
                aliases = [aliases]
            if not isinstance(aliases, list):
                raise RegistryValidationError(f"Aliases for service '{key}' must be a list")

            definitions.append(ServiceDefinition.create(
                key=str(key),
                aliases=aliases,
                env_name=entry.get("env_name"),
                deprecated_env_vars=bool(entry.get("deprecated_env_vars", False)),
                tf_aws_env_var=entry.get("tf_aws_env_var"),
                deprecated_env_var=entry.get("deprecated_env_var"),
                human_name=entry.get("human_name"),
            ))

        return cls(definitions)

    # ========== Lookups ==========

    def aliases_of(self, canonical: str) -> Tuple[str, ...]:
        definition = self._services.get(canonical)
        return definition.aliases if definition else ()

    def canonical_of(self, key: str) -> str:
        return self._canonical.get(key, key)

    def services(self) -> List[str]:
        """Canonical keys in declaration order."""
        return list(self._services.keys())

    def keys(self) -> List[str]:
        """Every canonical and alias key."""
        return list(self._canonical.keys())

    def definitions(self) -> List[ServiceDefinition]:
        return list(self._services.values())

    def has(self, key: str) -> bool:
        return key in self._canonical

    def get(self, key: str) -> ServiceDefinition:
        """Definition for a canonical or alias key; raises if unknown."""
        canonical = self._canonical.get(key)
        if canonical is None:
            raise ServiceNotFoundError(key)
        return self._services[canonical]

    def definition_for(self, key: str) -> ServiceDefinition:
        """Like get(), but unknown keys become their own service with derived names."""
        canonical = self._canonical.get(key)
        if canonical is None:
            return ServiceDefinition.create(key)
        return self._services[canonical]

    def env_var_names(self) -> List[str]:
        """All environment variables the table can consult, base variable last."""
        names: List[str] = []
        for definition in self._services.values():
            names.extend(definition.env_vars)
        names.append(BASE_ENV_VAR)
        return names

    def __len__(self) -> int:
        return len(self._services)

    def __contains__(self, key: object) -> bool:
        return key in self._canonical


def load_alias_table(path: Optional[str] = None) -> AliasTable:
    """Load a service registry YAML file; defaults to the packaged registry."""
    source = path or "service_endpoints/data/services.yaml"
    try:
        if path is None:
            text = resources.files("service_endpoints").joinpath("data/services.yaml").read_text(encoding="utf-8")
        else:
            with open(path, "r", encoding="utf-8") as f:
                text = f.read()
        data = yaml.safe_load(text) or {}
    except yaml.YAMLError as e:
        msg = f"YAML parsing error in {source}: {e}"
        logger.error(msg)
        raise RegistryValidationError(msg) from e

    table = AliasTable.from_mapping(data)
    logger.info(f"Loaded service registry from {source}: {len(table)} services")
    return table


@lru_cache(maxsize=1)
def default_alias_table() -> AliasTable:
    """
    Return the packaged service registry. Cached after first call.
    Call default_alias_table.cache_clear() in tests to reload.
    """
    return load_alias_table()
