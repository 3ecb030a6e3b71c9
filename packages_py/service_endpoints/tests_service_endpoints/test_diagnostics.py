"""
Tests for diagnostics helpers.
"""
from service_endpoints import (
    Diagnostic,
    DiagnosticCollector,
    Severity,
    deprecated_env_var_diag,
    has_errors,
    merge_diagnostics,
)
from service_endpoints.diagnostics import error, warning


def test_deprecated_env_var_diag():
    diagnostic = deprecated_env_var_diag("TF_AWS_STS_ENDPOINT", "AWS_ENDPOINT_URL_STS")

    assert diagnostic.severity == Severity.WARNING
    assert diagnostic.summary == "Deprecated Environment Variable"
    assert diagnostic.detail == (
        'The environment variable "TF_AWS_STS_ENDPOINT" is deprecated. '
        'Use environment variable "AWS_ENDPOINT_URL_STS" instead.'
    )


def test_diagnostic_equality():
    assert deprecated_env_var_diag("A", "B") == deprecated_env_var_diag("A", "B")
    assert deprecated_env_var_diag("A", "B") != deprecated_env_var_diag("A", "C")


def test_collector_dedupes_by_key():
    collector = DiagnosticCollector()

    assert collector.add(deprecated_env_var_diag("OLD", "NEW_A"), dedupe_key="OLD") is True
    assert collector.add(deprecated_env_var_diag("OLD", "NEW_B"), dedupe_key="OLD") is False
    assert collector.add(warning("other")) is True
    assert collector.add(warning("other")) is True

    assert len(collector) == 3
    assert collector.diagnostics[0].detail.endswith('"NEW_A" instead.')


def test_collector_returns_copy():
    collector = DiagnosticCollector()
    collector.add(warning("w"))

    collector.diagnostics.clear()

    assert len(collector) == 1


def test_has_errors():
    assert has_errors([warning("w")]) is False
    assert has_errors([warning("w"), error("e", "detail")]) is True
    assert error("e").is_error is True


def test_merge_diagnostics():
    existing = [warning("a"), error("b")]
    merged = merge_diagnostics(existing, [warning("a"), warning("c")])

    assert merged == [warning("a"), error("b"), warning("c")]
    assert existing == [warning("a"), error("b")]


def test_diagnostic_model():
    diagnostic = Diagnostic(severity="error", summary="s")

    assert diagnostic.severity == Severity.ERROR
    assert diagnostic.detail == ""
