"""
Diagnostics returned alongside resolved endpoints.

Diagnostics are values, not exceptions: the caller merges them into its own
stream and decides whether anything should block.
"""
import logging
from enum import Enum
from typing import Iterable, List, Optional, Set

from pydantic import BaseModel, ConfigDict

logger = logging.getLogger(__name__)

DEPRECATED_ENV_VAR_SUMMARY = "Deprecated Environment Variable"


class Severity(str, Enum):
    WARNING = 'warning'
    ERROR = 'error'


class Diagnostic(BaseModel):
    """A warning or error with a human-readable summary and detail."""
    model_config = ConfigDict(frozen=True)

    severity: Severity
    summary: str
    detail: str = ""

    @property
    def is_error(self) -> bool:
        return self.severity == Severity.ERROR


def warning(summary: str, detail: str = "") -> Diagnostic:
    return Diagnostic(severity=Severity.WARNING, summary=summary, detail=detail)


def error(summary: str, detail: str = "") -> Diagnostic:
    return Diagnostic(severity=Severity.ERROR, summary=summary, detail=detail)


def deprecated_env_var_diag(env_var: str, replacement: str) -> Diagnostic:
    """Warning for use of a deprecated environment variable."""
    return warning(
        DEPRECATED_ENV_VAR_SUMMARY,
        f'The environment variable "{env_var}" is deprecated. '
        f'Use environment variable "{replacement}" instead.',
    )


def has_errors(diagnostics: Iterable[Diagnostic]) -> bool:
    return any(d.is_error for d in diagnostics)


def merge_diagnostics(existing: Iterable[Diagnostic], new: Iterable[Diagnostic]) -> List[Diagnostic]:
    """Append new diagnostics to existing ones, skipping exact duplicates."""
    merged = list(existing)
    seen = set(merged)
    for diagnostic in new:
        if diagnostic not in seen:
            merged.append(diagnostic)
            seen.add(diagnostic)
    return merged


class DiagnosticCollector:
    """Ordered diagnostic list for one resolution pass.

    Diagnostics added with a dedupe key are kept only for the first
    occurrence of that key, so a deprecated variable warns once per pass.
    """

    def __init__(self) -> None:
        self._diagnostics: List[Diagnostic] = []
        self._seen_keys: Set[str] = set()

    def add(self, diagnostic: Diagnostic, dedupe_key: Optional[str] = None) -> bool:
        if dedupe_key is not None:
            if dedupe_key in self._seen_keys:
                logger.debug(f"Skipping duplicate diagnostic for '{dedupe_key}'")
                return False
            self._seen_keys.add(dedupe_key)

        self._diagnostics.append(diagnostic)
        return True

    @property
    def diagnostics(self) -> List[Diagnostic]:
        return list(self._diagnostics)

    def __len__(self) -> int:
        return len(self._diagnostics)
