"""Diagnostics helpers."""

from __future__ import annotations

from collections.abc import Iterable

from gabcpy.diagnostics.diagnostic import Diagnostic

SEVERITY_ORDER = {"error": 0, "warning": 1, "info": 2}


def collect_diagnostics(*groups: Iterable[Diagnostic]) -> list[Diagnostic]:
    diagnostics: list[Diagnostic] = []
    for group in groups:
        diagnostics.extend(group)
    return diagnostics


def has_errors(diagnostics: Iterable[Diagnostic]) -> bool:
    return any(d.severity == "error" for d in diagnostics)


def sort_by_severity(diagnostics: Iterable[Diagnostic]) -> list[Diagnostic]:
    """Stable sort: errors, then warnings, then info."""
    return sorted(diagnostics, key=lambda diagnostic: SEVERITY_ORDER[diagnostic.severity])


def dedupe_diagnostics(diagnostics: Iterable[Diagnostic]) -> list[Diagnostic]:
    """Drop repeated findings, keeping the first occurrence."""
    deduped: list[Diagnostic] = []
    seen: set[tuple[object, ...]] = set()
    for diagnostic in diagnostics:
        key = (
            diagnostic.range.start,
            diagnostic.range.end,
            diagnostic.code,
            diagnostic.message,
            diagnostic.category,
            diagnostic.hint,
        )
        if key in seen:
            continue
        seen.add(key)
        deduped.append(diagnostic)
    return deduped
