"""Validation rules and rule contracts."""

from __future__ import annotations

from collections.abc import Sequence, Set as AbstractSet
from dataclasses import dataclass
from typing import Literal, Protocol, TypeAlias

from gabcpy.diagnostics import Diagnostic, Severity
from gabcpy.diagnostics.codes import (
    RULE_CLEF_CHANGE_ON_FIRST_SYLLABLE,
    RULE_DUPLICATE_HEADER,
    RULE_INVALID_NABC_LINES,
    RULE_INVALID_STAFF_LINES,
    RULE_LINE_BREAK_ON_FIRST_SYLLABLE,
    RULE_MISSING_NAME_HEADER,
    RULE_NABC_ALTERNATION_MISMATCH,
    RULE_NABC_FUSION_MODIFIER_PLACEMENT,
    RULE_NABC_UNBALANCED_PITCH,
    RULE_PIPE_WITHOUT_NABC_LINES,
    RULE_QUILISMA_EQUAL_OR_LOWER,
    RULE_QUILISMA_MISSING_CONNECTOR,
    RULE_QUILISMA_PES_PRECEDED_BY_HIGHER,
    RULE_VIRGA_STRATA_EQUAL_OR_HIGHER,
)
from gabcpy.model import Document, HeaderEntry
from gabcpy.text import Range
from gabcpy.validation.findings import (
    compare_pitch,
    duplicate_header,
    first_syllable_clef_change,
    first_syllable_line_break,
    has_connector,
    is_quilisma,
    is_quilisma_pes,
    is_virga_strata,
    iter_nabc_chains,
    misplaced_fusion_modifiers,
    quilisma_equal_or_lower,
    quilisma_missing_connector,
    quilisma_pes_preceded_by_higher,
    unbalanced_pitch_descriptors,
    virga_strata_equal_or_higher,
)

RuleConfidence: TypeAlias = Literal["policy", "heuristic"]

_SEVERITIES: frozenset[str] = frozenset({"error", "warning", "info"})
_CONFIDENCES: frozenset[str] = frozenset({"policy", "heuristic"})


class ValidationRule(Protocol):
    """Independent, stateless check over a whole document."""

    @property
    def code(self) -> str: ...

    @property
    def name(self) -> str: ...

    @property
    def severity(self) -> Severity: ...

    @property
    def category(self) -> str: ...

    @property
    def confidence(self) -> RuleConfidence: ...

    def run(self, document: Document) -> list[Diagnostic]: ...


@dataclass(frozen=True, slots=True)
class NameHeaderRule:
    code: str = RULE_MISSING_NAME_HEADER.code
    name: str = "name-header"
    severity: Severity = RULE_MISSING_NAME_HEADER.severity
    category: str = "headers"
    confidence: RuleConfidence = "policy"

    def run(self, document: Document) -> list[Diagnostic]:
        if document.header("name") is not None:
            return []
        return [Diagnostic.from_spec(RULE_MISSING_NAME_HEADER, Range.zero())]


@dataclass(frozen=True, slots=True)
class DuplicateHeadersRule:
    """One warning per header name declared more than once."""

    code: str = RULE_DUPLICATE_HEADER.code
    name: str = "duplicate-headers"
    severity: Severity = RULE_DUPLICATE_HEADER.severity
    category: str = "headers"
    confidence: RuleConfidence = "policy"

    def run(self, document: Document) -> list[Diagnostic]:
        return [duplicate_header(name, entries) for name, entries in document.duplicate_headers().items()]


@dataclass(frozen=True, slots=True)
class FirstSyllableLineBreakRule:
    code: str = RULE_LINE_BREAK_ON_FIRST_SYLLABLE.code
    name: str = "first-syllable-line-break"
    severity: Severity = RULE_LINE_BREAK_ON_FIRST_SYLLABLE.severity
    category: str = "structure"
    confidence: RuleConfidence = "policy"

    def run(self, document: Document) -> list[Diagnostic]:
        diagnostic = first_syllable_line_break(document)
        return [diagnostic] if diagnostic is not None else []


@dataclass(frozen=True, slots=True)
class FirstSyllableClefChangeRule:
    """Flags a clef change on the first musical syllable.

    Only clefs tagged `ClefRole.CHANGE` count; the clef that opens the score
    never does.
    """

    code: str = RULE_CLEF_CHANGE_ON_FIRST_SYLLABLE.code
    name: str = "first-syllable-clef-change"
    severity: Severity = RULE_CLEF_CHANGE_ON_FIRST_SYLLABLE.severity
    category: str = "structure"
    confidence: RuleConfidence = "policy"

    def run(self, document: Document) -> list[Diagnostic]:
        diagnostic = first_syllable_clef_change(document)
        return [diagnostic] if diagnostic is not None else []


@dataclass(frozen=True, slots=True)
class NabcWithoutHeaderRule:
    code: str = RULE_PIPE_WITHOUT_NABC_LINES.code
    name: str = "nabc-without-header"
    severity: Severity = RULE_PIPE_WITHOUT_NABC_LINES.severity
    category: str = "nabc"
    confidence: RuleConfidence = "policy"

    def run(self, document: Document) -> list[Diagnostic]:
        if document.header("nabc-lines") is not None:
            return []
        return [
            Diagnostic.from_spec(RULE_PIPE_WITHOUT_NABC_LINES, group.range)
            for _, _, group in document.iter_note_groups()
            if group.has_nabc
        ]


@dataclass(frozen=True, slots=True)
class NabcAlternationRule:
    """Every note group with NABC must carry exactly `nabc-lines` segments."""

    code: str = RULE_NABC_ALTERNATION_MISMATCH.code
    name: str = "nabc-alternation"
    severity: Severity = RULE_NABC_ALTERNATION_MISMATCH.severity
    category: str = "nabc"
    confidence: RuleConfidence = "policy"

    def run(self, document: Document) -> list[Diagnostic]:
        if document.header("nabc-lines") is None:
            return []
        declared = document.nabc_lines
        if declared is None:
            entry = _last_entry(document, "nabc-lines")
            return [
                Diagnostic.from_spec(
                    RULE_INVALID_NABC_LINES,
                    entry.value_range if entry is not None else Range.zero(),
                )
            ]

        diagnostics: list[Diagnostic] = []
        for _, _, group in document.iter_note_groups():
            if not group.has_nabc or len(group.nabc) == declared:
                continue
            diagnostics.append(
                Diagnostic.from_spec(
                    RULE_NABC_ALTERNATION_MISMATCH,
                    group.range,
                    message=RULE_NABC_ALTERNATION_MISMATCH.message.format(
                        found=len(group.nabc),
                        declared=declared,
                    ),
                    hint=f"Write {declared} `|`-separated NABC segment(s) in this note group.",
                )
            )
        return diagnostics


@dataclass(frozen=True, slots=True)
class QuilismaFollowedByLowerPitchRule:
    code: str = RULE_QUILISMA_EQUAL_OR_LOWER.code
    name: str = "quilisma-lower-pitch"
    severity: Severity = RULE_QUILISMA_EQUAL_OR_LOWER.severity
    category: str = "pitch"
    confidence: RuleConfidence = "heuristic"

    def run(self, document: Document) -> list[Diagnostic]:
        diagnostics: list[Diagnostic] = []
        for _, _, group in document.iter_note_groups():
            notes = group.notes
            for index, note in enumerate(notes[:-1]):
                following = notes[index + 1]
                if is_quilisma(note) and compare_pitch(following.pitch, note.pitch) <= 0:
                    diagnostics.append(quilisma_equal_or_lower(note, following))
        return diagnostics


@dataclass(frozen=True, slots=True)
class QuilismaPesPrecededByHigherPitchRule:
    """Quilisma pes opening a syllable, preceded by the previous syllable's last note."""

    code: str = RULE_QUILISMA_PES_PRECEDED_BY_HIGHER.code
    name: str = "quilisma-pes-higher-pitch"
    severity: Severity = RULE_QUILISMA_PES_PRECEDED_BY_HIGHER.severity
    category: str = "pitch"
    confidence: RuleConfidence = "heuristic"

    def run(self, document: Document) -> list[Diagnostic]:
        diagnostics: list[Diagnostic] = []
        syllables = document.syllables
        for index in range(1, len(syllables)):
            previous_notes = syllables[index - 1].notes
            notes = syllables[index].notes
            if not previous_notes or not notes or not is_quilisma_pes(notes, 0):
                continue
            previous = previous_notes[-1]
            if compare_pitch(previous.pitch, notes[0].pitch) >= 0:
                diagnostics.append(quilisma_pes_preceded_by_higher(previous, notes[0]))
        return diagnostics


@dataclass(frozen=True, slots=True)
class VirgaStrataFollowedByHigherPitchRule:
    code: str = RULE_VIRGA_STRATA_EQUAL_OR_HIGHER.code
    name: str = "virga-strata-higher-pitch"
    severity: Severity = RULE_VIRGA_STRATA_EQUAL_OR_HIGHER.severity
    category: str = "pitch"
    confidence: RuleConfidence = "heuristic"

    def run(self, document: Document) -> list[Diagnostic]:
        diagnostics: list[Diagnostic] = []
        for _, _, group in document.iter_note_groups():
            notes = group.notes
            for index, note in enumerate(notes[:-1]):
                following = notes[index + 1]
                if is_virga_strata(note) and compare_pitch(following.pitch, note.pitch) >= 0:
                    diagnostics.append(virga_strata_equal_or_higher(note, following))
        return diagnostics


@dataclass(frozen=True, slots=True)
class StaffLinesRule:
    code: str = RULE_INVALID_STAFF_LINES.code
    name: str = "staff-lines"
    severity: Severity = RULE_INVALID_STAFF_LINES.severity
    category: str = "headers"
    confidence: RuleConfidence = "policy"
    minimum: int = 2
    maximum: int = 5

    def run(self, document: Document) -> list[Diagnostic]:
        raw = document.header("staff-lines")
        if raw is None:
            return []
        try:
            value = int(raw.strip())
        except ValueError:
            value = None
        if value is not None and self.minimum <= value <= self.maximum:
            return []
        entry = _last_entry(document, "staff-lines")
        return [
            Diagnostic.from_spec(
                RULE_INVALID_STAFF_LINES,
                entry.value_range if entry is not None else Range.zero(),
                hint=f"Found `{raw}`.",
            )
        ]


@dataclass(frozen=True, slots=True)
class FusedGlyphPitchBalanceRule:
    code: str = RULE_NABC_UNBALANCED_PITCH.code
    name: str = "balanced-pitch-descriptors-fused-glyphs"
    severity: Severity = RULE_NABC_UNBALANCED_PITCH.severity
    category: str = "nabc"
    confidence: RuleConfidence = "policy"

    def run(self, document: Document) -> list[Diagnostic]:
        diagnostics: list[Diagnostic] = []
        for _, chain in iter_nabc_chains(document):
            diagnostic = unbalanced_pitch_descriptors(chain)
            if diagnostic is not None:
                diagnostics.append(diagnostic)
        return diagnostics


@dataclass(frozen=True, slots=True)
class FusedGlyphModifierPlacementRule:
    code: str = RULE_NABC_FUSION_MODIFIER_PLACEMENT.code
    name: str = "modifiers-in-fused-glyphs"
    severity: Severity = RULE_NABC_FUSION_MODIFIER_PLACEMENT.severity
    category: str = "nabc"
    confidence: RuleConfidence = "policy"

    def run(self, document: Document) -> list[Diagnostic]:
        diagnostics: list[Diagnostic] = []
        for _, chain in iter_nabc_chains(document):
            diagnostic = misplaced_fusion_modifiers(chain)
            if diagnostic is not None:
                diagnostics.append(diagnostic)
        return diagnostics


@dataclass(frozen=True, slots=True)
class QuilismaConnectorRule:
    """Suggests a connector for quilismatic runs of three or more notes."""

    code: str = RULE_QUILISMA_MISSING_CONNECTOR.code
    name: str = "quilisma-connector"
    severity: Severity = RULE_QUILISMA_MISSING_CONNECTOR.severity
    category: str = "notation"
    confidence: RuleConfidence = "heuristic"

    def run(self, document: Document) -> list[Diagnostic]:
        diagnostics: list[Diagnostic] = []
        for _, _, group in document.iter_note_groups():
            notes = group.notes
            if len(notes) < 3:
                continue
            for index in range(1, len(notes)):
                if is_quilisma(notes[index]) and not has_connector(notes, index):
                    diagnostics.append(quilisma_missing_connector(notes, index))
        return diagnostics


def _last_entry(document: Document, name: str) -> HeaderEntry | None:
    for entry in reversed(document.header_entries):
        if entry.name == name:
            return entry
    return None


def default_validation_rules() -> tuple[ValidationRule, ...]:
    """Registered rules, in the order their findings are reported."""
    return (
        NameHeaderRule(),
        DuplicateHeadersRule(),
        FirstSyllableLineBreakRule(),
        FirstSyllableClefChangeRule(),
        NabcWithoutHeaderRule(),
        NabcAlternationRule(),
        QuilismaFollowedByLowerPitchRule(),
        QuilismaPesPrecededByHigherPitchRule(),
        VirgaStrataFollowedByHigherPitchRule(),
        StaffLinesRule(),
        FusedGlyphPitchBalanceRule(),
        FusedGlyphModifierPlacementRule(),
        QuilismaConnectorRule(),
    )


def rule_contract_violation(rule: ValidationRule, seen_names: AbstractSet[str]) -> str | None:
    """Describe why rule cannot join a set already holding seen_names, or None."""
    if not rule.name:
        return f"Rule `{type(rule).__name__}` has no name"
    if rule.name in seen_names:
        return f"Duplicate rule name `{rule.name}`"
    if rule.severity not in _SEVERITIES:
        return f"Rule `{rule.name}` has unknown severity `{rule.severity}`"
    if rule.confidence not in _CONFIDENCES:
        return f"Rule `{rule.name}` has unknown confidence `{rule.confidence}`"
    return None


def validate_rule_contracts(rules: Sequence[ValidationRule]) -> None:
    """Raise ValueError for rule sets that cannot be run deterministically."""
    names: set[str] = set()
    for rule in rules:
        violation = rule_contract_violation(rule, names)
        if violation is not None:
            raise ValueError(violation)
        names.add(rule.name)
