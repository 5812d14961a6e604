"""Diagnostics."""

from gabcpy.diagnostics.codes import DiagnosticSpec, Severity
from gabcpy.diagnostics.diagnostic import Diagnostic, RelatedInformation
from gabcpy.diagnostics.report import (
    collect_diagnostics,
    dedupe_diagnostics,
    has_errors,
    sort_by_severity,
)

__all__ = [
    "Diagnostic",
    "DiagnosticSpec",
    "RelatedInformation",
    "Severity",
    "collect_diagnostics",
    "dedupe_diagnostics",
    "has_errors",
    "sort_by_severity",
]
