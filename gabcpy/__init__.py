"""GABC/NABC chant notation parser, validator and semantic analyzer."""

from gabcpy.diagnostics import Diagnostic, RelatedInformation
from gabcpy.model import Document
from gabcpy.parser import parse, parse_file
from gabcpy.pipeline import CheckRunResult, run_check
from gabcpy.semantic import analyze
from gabcpy.validation import ValidationMode, ValidationOptions, available_rule_names, validate


def check(text: str, options: ValidationOptions | None = None) -> CheckRunResult:
    """Parse, validate and analyze text in one pass."""
    return run_check(text, options)


__all__ = [
    "CheckRunResult",
    "Diagnostic",
    "Document",
    "RelatedInformation",
    "ValidationMode",
    "ValidationOptions",
    "analyze",
    "available_rule_names",
    "check",
    "parse",
    "parse_file",
    "validate",
]
