"""Unified entrypoints that orchestrate parse/validate/analyze with one parse lifecycle."""

from __future__ import annotations

from collections.abc import Sequence

from gabcpy.diagnostics import dedupe_diagnostics, has_errors, sort_by_severity
from gabcpy.model import Document
from gabcpy.parser import parse
from gabcpy.pipeline.results import AnalysisRunResult, CheckRunResult, ValidationRunResult
from gabcpy.semantic import analyze
from gabcpy.validation import ValidationOptions, ValidationRule, filter_findings, validate


def run_validate(
    text: str,
    options: ValidationOptions | None = None,
    *,
    document: Document | None = None,
    rules: Sequence[ValidationRule] | None = None,
) -> ValidationRunResult:
    """Run the rule engine over one parse of text."""
    resolved = _resolve_document(text, document)
    diagnostics = validate(resolved, options, rules=rules)
    return ValidationRunResult(document=resolved, diagnostics=diagnostics, has_errors=has_errors(diagnostics))


def run_analyze(text: str, *, document: Document | None = None) -> AnalysisRunResult:
    """Run the semantic analyzer over one parse of text."""
    resolved = _resolve_document(text, document)
    return AnalysisRunResult(document=resolved, diagnostics=analyze(resolved))


def run_check(
    text: str,
    options: ValidationOptions | None = None,
    *,
    document: Document | None = None,
    rules: Sequence[ValidationRule] | None = None,
) -> CheckRunResult:
    """Parse once, then validate and analyze; findings reported by both passes appear once.

    Semantic findings go through the same options as the rules, so a disabled
    rule stays silent even where the analyzer repeats it.
    """
    validation = run_validate(text, options, document=document, rules=rules)
    analysis = run_analyze(text, document=validation.document)
    semantic = filter_findings(analysis.diagnostics, options, rules=rules)
    diagnostics = sort_by_severity(dedupe_diagnostics([*validation.diagnostics, *semantic]))
    return CheckRunResult(
        document=validation.document,
        diagnostics=diagnostics,
        has_errors=has_errors(diagnostics),
    )


def _resolve_document(text: str, document: Document | None) -> Document:
    if document is not None:
        if document.source_text != text:
            raise ValueError("Provided document must be parsed from the same source text")
        return document
    return parse(text)
