"""
Endpoint resolution logic.
"""
import logging
from typing import Dict, List, Optional

from .aliases import AliasTable, BASE_ENV_VAR, ServiceDefinition, default_alias_table
from .diagnostics import DiagnosticCollector, deprecated_env_var_diag
from .types import ConfigurationSources, EndpointResolution, ResolutionResult

logger = logging.getLogger(__name__)

_DEPRECATED_SOURCES = ('env_tf_deprecated', 'env_deprecated')


class EndpointResolver:
    """Resolves the endpoint override for every service in an alias table."""

    def __init__(self, table: AliasTable):
        self.table = table

    def resolve(self, sources: ConfigurationSources) -> ResolutionResult:
        """Resolve every service and collect diagnostics for the whole pass."""
        collector = DiagnosticCollector()
        endpoints: Dict[str, str] = {}
        resolutions: Dict[str, EndpointResolution] = {}

        for definition in self._definitions(sources):
            resolution = self._resolve_definition(definition, sources)
            resolutions[definition.key] = resolution

            if resolution.endpoint:
                endpoints[definition.key] = resolution.endpoint

            for diagnostic in resolution.diagnostics:
                if collector.add(diagnostic, dedupe_key=resolution.key_used):
                    logger.warning(f"{diagnostic.summary}: {diagnostic.detail}")

        logger.info(
            f"Resolved endpoint overrides for {len(endpoints)} of {len(resolutions)} services "
            f"({len(collector)} diagnostics)"
        )
        return ResolutionResult(
            endpoints=endpoints,
            diagnostics=collector.diagnostics,
            resolutions=resolutions,
            table=self.table,
        )

    def resolve_service(self, key: str, sources: ConfigurationSources) -> EndpointResolution:
        """Resolve one service given its canonical or alias key."""
        return self._resolve_definition(self.table.definition_for(key), sources)

    def _definitions(self, sources: ConfigurationSources) -> List[ServiceDefinition]:
        """Registered services, then explicitly configured keys the table does not know."""
        definitions = self.table.definitions()
        for key in sources.explicit:
            if key not in self.table:
                logger.debug(f"Endpoint configured for unregistered service '{key}'")
                definitions.append(self.table.definition_for(key))
        return definitions

    def _resolve_definition(
        self,
        definition: ServiceDefinition,
        sources: ConfigurationSources,
    ) -> EndpointResolution:
        """Apply the precedence chain for one service.

        Precedence:
        1. explicit config, canonical key
        2. explicit config, each alias in declared order
        3. AWS_ENDPOINT_URL_<SERVICE>
        4. TF_AWS_<SERVICE>_ENDPOINT (deprecated, warns)
        5. AWS_<SERVICE>_ENDPOINT (deprecated, warns)
        6. AWS_ENDPOINT_URL
        7. shared config file, per-service endpoint
        8. shared config file, base endpoint
        9. no override
        """
        service = definition.key

        # 1 & 2. Explicit configuration
        for key in definition.all_keys:
            value = sources.explicit.get(key)
            if value:
                source = 'explicit' if key == service else 'explicit_alias'
                logger.debug(f"[{service}] Using explicit endpoint from key '{key}'")
                return EndpointResolution(service, value, source, key_used=key)

        env = sources.environment

        # 3. Current per-service variable
        value = env.get(definition.env_var)
        if value:
            logger.debug(f"[{service}] Using {definition.env_var} env var")
            return EndpointResolution(service, value, 'env', key_used=definition.env_var)

        # 4 & 5. Deprecated per-service variables
        deprecated = (
            (definition.tf_aws_env_var, _DEPRECATED_SOURCES[0]),
            (definition.deprecated_env_var, _DEPRECATED_SOURCES[1]),
        )
        for env_var, source in deprecated:
            value = env.get(env_var)
            if value:
                logger.debug(f"[{service}] Using deprecated {env_var} env var")
                return EndpointResolution(
                    service,
                    value,
                    source,
                    key_used=env_var,
                    diagnostics=[deprecated_env_var_diag(env_var, definition.env_var)],
                )

        # 6. Base variable shared by all services
        value = env.get(BASE_ENV_VAR)
        if value:
            logger.debug(f"[{service}] Using {BASE_ENV_VAR} env var")
            return EndpointResolution(service, value, 'env_base', key_used=BASE_ENV_VAR)

        # 7 & 8. Shared configuration file
        config_file = sources.config_file
        if config_file is not None:
            value = config_file.service_url(definition.all_keys)
            if value:
                logger.debug(f"[{service}] Using service endpoint from shared config file")
                return EndpointResolution(service, value, 'config_file_service')

            if config_file.base_url:
                logger.debug(f"[{service}] Using base endpoint from shared config file")
                return EndpointResolution(service, config_file.base_url, 'config_file_base')

        # 9. SDK default
        return EndpointResolution(service, None, 'default')


def resolve_endpoints(
    sources: ConfigurationSources,
    table: Optional[AliasTable] = None,
) -> ResolutionResult:
    """Convenience function to resolve every service against the packaged registry."""
    return EndpointResolver(table or default_alias_table()).resolve(sources)
