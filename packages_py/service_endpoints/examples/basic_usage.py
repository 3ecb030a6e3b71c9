"""
Basic usage examples for service_endpoints package.

This package resolves per-service endpoint overrides with 9-level precedence.
"""
import logging
from service_endpoints import (
    ConfigFileView,
    ConfigurationSources,
    EndpointResolver,
    collect_sources,
    default_alias_table,
)


# =============================================================================
# Example 1: Explicit configuration
# =============================================================================
def example1_explicit_config() -> None:
    """
    The host framework hands over its `endpoints` block as a list holding one
    mapping. Unset services are simply empty strings.
    """
    table = default_alias_table()
    sources = collect_sources(
        table,
        endpoints=[{"sts": "https://sts.fake.test", "s3": ""}],
        environ={},
    )

    result = EndpointResolver(table).resolve(sources)
    print(f"Example 1 - Explicit config: {result.endpoints}")
    # Output: {'sts': 'https://sts.fake.test'}


# =============================================================================
# Example 2: Aliases
# =============================================================================
def example2_aliases() -> None:
    """
    Older service names still work; results are keyed by the canonical name.
    """
    table = default_alias_table()
    sources = ConfigurationSources.build(explicit={"transcribeservice": "https://transcribe.fake.test"})

    result = EndpointResolver(table).resolve(sources)
    print(f"Example 2 - Alias: {result.endpoints}")
    print(f"  endpoint_for('transcribeservice') -> {result.endpoint_for('transcribeservice')}")
    # Output: {'transcribe': 'https://transcribe.fake.test'}


# =============================================================================
# Example 3: Deprecated environment variables
# =============================================================================
def example3_deprecated_env() -> None:
    """
    Deprecated variables still resolve, but produce a warning naming the
    replacement variable.
    """
    table = default_alias_table()
    sources = collect_sources(table, environ={"TF_AWS_STS_ENDPOINT": "https://sts-old.fake.test"})

    result = EndpointResolver(table).resolve(sources)
    print(f"Example 3 - Deprecated env var: {result.endpoints}")
    for diagnostic in result.diagnostics:
        print(f"  [{diagnostic.severity.value}] {diagnostic.summary}: {diagnostic.detail}")


# =============================================================================
# Example 4: Base endpoint and shared config file
# =============================================================================
def example4_base_endpoint() -> None:
    """
    AWS_ENDPOINT_URL and the shared config file apply to every service that
    has no more specific override, which is handy for local emulators.
    """
    table = default_alias_table()
    sources = ConfigurationSources.build(
        explicit={"sts": "https://sts.fake.test"},
        config_file=ConfigFileView(
            base_url="http://localhost:4566",
            service_urls={"s3": "http://localhost:9000"},
        ),
    )

    result = EndpointResolver(table).resolve(sources)
    print("Example 4 - Base endpoint:")
    for service in ("sts", "s3", "sqs"):
        resolution = result.resolutions[service]
        print(f"  {service}: {resolution.endpoint} (source={resolution.source})")


def main() -> None:
    logging.basicConfig(level=logging.INFO)
    print("=== service_endpoints Examples ===\n")

    example1_explicit_config()
    example2_aliases()
    example3_deprecated_env()
    example4_base_endpoint()

    print("\n=== Examples Complete ===")


if __name__ == "__main__":
    main()
