"""Pipeline run result carriers for tool entrypoints."""

from __future__ import annotations

from dataclasses import dataclass

from gabcpy.diagnostics import Diagnostic
from gabcpy.model import Document


@dataclass(frozen=True, slots=True)
class ValidationRunResult:
    """Result of running the rule engine over one parsed document."""

    document: Document
    diagnostics: list[Diagnostic]
    has_errors: bool


@dataclass(frozen=True, slots=True)
class AnalysisRunResult:
    """Result of the semantic pass over one parsed document."""

    document: Document
    diagnostics: list[Diagnostic]


@dataclass(frozen=True, slots=True)
class CheckRunResult:
    """Merged, deduplicated and severity-sorted findings of every pass."""

    document: Document
    diagnostics: list[Diagnostic]
    has_errors: bool
