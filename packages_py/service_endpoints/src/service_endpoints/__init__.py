"""
Service endpoint override resolution package.
"""
from .aliases import (
    AliasTable,
    ServiceDefinition,
    BASE_ENV_VAR,
    default_alias_table,
    load_alias_table,
)
from .diagnostics import (
    Diagnostic,
    DiagnosticCollector,
    Severity,
    deprecated_env_var_diag,
    has_errors,
    merge_diagnostics,
)
from .errors import (
    ServiceEndpointsError,
    RegistryValidationError,
    AliasCollisionError,
    ServiceNotFoundError,
    ConfigLoadError,
)
from .types import (
    ConfigurationSources,
    ConfigFileView,
    EnvironmentView,
    EndpointResolution,
    EndpointSource,
    ResolutionResult,
)
from .resolver import EndpointResolver, resolve_endpoints
from .sources import collect_sources, expand_endpoints, load_sources_from_yaml

__all__ = [
    "AliasTable",
    "ServiceDefinition",
    "BASE_ENV_VAR",
    "default_alias_table",
    "load_alias_table",
    "Diagnostic",
    "DiagnosticCollector",
    "Severity",
    "deprecated_env_var_diag",
    "has_errors",
    "merge_diagnostics",
    "ServiceEndpointsError",
    "RegistryValidationError",
    "AliasCollisionError",
    "ServiceNotFoundError",
    "ConfigLoadError",
    "ConfigurationSources",
    "ConfigFileView",
    "EnvironmentView",
    "EndpointResolution",
    "EndpointSource",
    "ResolutionResult",
    "EndpointResolver",
    "resolve_endpoints",
    "collect_sources",
    "expand_endpoints",
    "load_sources_from_yaml",
]
