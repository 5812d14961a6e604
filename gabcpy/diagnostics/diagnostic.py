"""Diagnostics core types."""

from dataclasses import dataclass

from gabcpy.diagnostics.codes import DiagnosticSpec, Severity
from gabcpy.text import Range


@dataclass(frozen=True, slots=True)
class RelatedInformation:
    """Secondary range with explanatory text attached to a diagnostic."""

    message: str
    range: Range


@dataclass(frozen=True, slots=True)
class Diagnostic:
    """Structured diagnostic emitted by the parser, the validator and the semantic analyzer."""

    code: str
    message: str
    range: Range
    severity: Severity = "error"
    hint: str | None = None
    category: str | None = None
    related_info: tuple[RelatedInformation, ...] = ()

    @staticmethod
    def from_spec(
        spec: DiagnosticSpec,
        range: Range,
        *,
        message: str | None = None,
        hint: str | None = None,
        related_info: tuple[RelatedInformation, ...] = (),
    ) -> "Diagnostic":
        return Diagnostic(
            code=spec.code,
            message=message if message is not None else spec.message,
            range=range,
            severity=spec.severity,
            hint=hint if hint is not None else spec.hint,
            category=spec.category,
            related_info=related_info,
        )
