"""
Data models for endpoint resolution.
"""
import os
from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, List, Literal, Mapping, Optional

from dotenv import dotenv_values
from pydantic import BaseModel, ConfigDict, Field, field_validator

from .aliases import AliasTable, ENV_VAR_PREFIX
from .diagnostics import Diagnostic, has_errors, merge_diagnostics, Severity

EndpointSource = Literal[
    'explicit',
    'explicit_alias',
    'env',
    'env_tf_deprecated',
    'env_deprecated',
    'env_base',
    'config_file_service',
    'config_file_base',
    'default',
]


def _drop_empty(values: Any) -> Dict[str, str]:
    if not values:
        return {}
    return {k: v for k, v in dict(values).items() if isinstance(v, str) and v}


class EnvironmentView(BaseModel):
    """Snapshot of the environment variables relevant to endpoint resolution."""
    model_config = ConfigDict(frozen=True)

    variables: Dict[str, str] = Field(default_factory=dict, description="Variable name to value")

    @field_validator("variables", mode="before")
    @classmethod
    def _normalize(cls, v: Any) -> Dict[str, str]:
        return _drop_empty(v)

    def get(self, name: Optional[str]) -> Optional[str]:
        """Value of a variable, or None when unset or empty."""
        if not name:
            return None
        return self.variables.get(name) or None

    @classmethod
    def from_environ(
        cls,
        table: AliasTable,
        environ: Optional[Mapping[str, str]] = None,
    ) -> "EnvironmentView":
        """Copy the variables the table can consult.

        Every AWS_ENDPOINT_URL_<NAME> variable is kept as well, so services
        outside the table can still read their derived variable.
        """
        environ = os.environ if environ is None else environ
        names = set(table.env_var_names())
        return cls(variables={
            name: value
            for name, value in environ.items()
            if value and (name in names or name.startswith(f"{ENV_VAR_PREFIX}_"))
        })

    @classmethod
    def from_dotenv(
        cls,
        table: AliasTable,
        path: str,
        environ: Optional[Mapping[str, str]] = None,
    ) -> "EnvironmentView":
        """Read a .env file, with process variables taking precedence over it."""
        merged: Dict[str, str] = {k: v for k, v in dotenv_values(path).items() if v is not None}
        overlay = os.environ if environ is None else environ
        merged.update({k: v for k, v in overlay.items() if v})
        return cls.from_environ(table, merged)


class ConfigFileView(BaseModel):
    """Endpoint settings extracted from the shared configuration file."""
    model_config = ConfigDict(frozen=True)

    base_url: Optional[str] = Field(default=None, description="Endpoint applied to every service")
    service_urls: Dict[str, str] = Field(default_factory=dict, description="Per-service endpoints")

    @field_validator("service_urls", mode="before")
    @classmethod
    def _normalize(cls, v: Any) -> Dict[str, str]:
        return _drop_empty(v)

    def service_url(self, keys: Iterable[str]) -> Optional[str]:
        """First per-service endpoint found under any of the given keys."""
        for key in keys:
            value = self.service_urls.get(key)
            if value:
                return value
        return None

    @classmethod
    def from_mapping(cls, data: Optional[Mapping[str, Any]]) -> "ConfigFileView":
        """
        Accept a parsed shared-config section:

            endpoint_url: https://base
            services:
              sts:
                endpoint_url: https://sts
              s3: https://s3
        """
        data = data or {}
        if not isinstance(data, Mapping):
            raise ValueError("shared config section must be a mapping")

        services = data.get("services") or {}
        if not isinstance(services, Mapping):
            raise ValueError("'services' in shared config section must be a mapping")

        service_urls: Dict[str, str] = {}
        for key, entry in services.items():
            if isinstance(entry, dict):
                entry = entry.get("endpoint_url")
            if isinstance(entry, str) and entry:
                service_urls[str(key)] = entry

        return cls(base_url=data.get("endpoint_url") or None, service_urls=service_urls)


class ConfigurationSources(BaseModel):
    """Read-only bundle of every source consulted in one resolution pass."""
    model_config = ConfigDict(frozen=True)

    explicit: Dict[str, str] = Field(default_factory=dict, description="Config key to endpoint")
    environment: EnvironmentView = Field(default_factory=EnvironmentView)
    config_file: Optional[ConfigFileView] = None

    @field_validator("explicit", mode="before")
    @classmethod
    def _normalize(cls, v: Any) -> Dict[str, str]:
        return _drop_empty(v)

    @classmethod
    def build(
        cls,
        explicit: Optional[Mapping[str, str]] = None,
        environment: Optional[Mapping[str, str]] = None,
        config_file: Optional[ConfigFileView] = None,
    ) -> "ConfigurationSources":
        return cls(
            explicit=explicit or {},
            environment=EnvironmentView(variables=environment or {}),
            config_file=config_file,
        )


@dataclass
class EndpointResolution:
    """Outcome of resolving a single service."""
    service: str
    endpoint: Optional[str]
    source: EndpointSource
    key_used: Optional[str] = None
    diagnostics: List[Diagnostic] = field(default_factory=list)

    @property
    def is_default(self) -> bool:
        return self.endpoint is None


@dataclass
class ResolutionResult:
    """Resolved endpoints for every service plus the pass's diagnostics."""
    endpoints: Dict[str, str]
    diagnostics: List[Diagnostic] = field(default_factory=list)
    resolutions: Dict[str, EndpointResolution] = field(default_factory=dict)
    table: Optional[AliasTable] = field(default=None, repr=False, compare=False)

    def _canonical(self, key: str) -> str:
        return self.table.canonical_of(key) if self.table is not None else key

    def endpoint_for(self, key: str) -> Optional[str]:
        """Endpoint for a canonical or alias key; None means use the SDK default."""
        return self.endpoints.get(self._canonical(key))

    def has_override(self, key: str) -> bool:
        return self._canonical(key) in self.endpoints

    @property
    def warnings(self) -> List[Diagnostic]:
        return [d for d in self.diagnostics if d.severity == Severity.WARNING]

    @property
    def errors(self) -> List[Diagnostic]:
        return [d for d in self.diagnostics if d.severity == Severity.ERROR]

    @property
    def has_errors(self) -> bool:
        return has_errors(self.diagnostics)

    def merge_diagnostics(self, existing: Iterable[Diagnostic]) -> List[Diagnostic]:
        """Caller's diagnostics with this pass's appended."""
        return merge_diagnostics(existing, self.diagnostics)

    def as_dict(self) -> Dict[str, str]:
        return dict(self.endpoints)
