"""Diagnostic codes and messages."""

from dataclasses import dataclass
from typing import Final, Literal

Severity = Literal["error", "warning", "info"]


@dataclass(frozen=True, slots=True)
class DiagnosticSpec:
    code: str
    message: str
    hint: str | None = None
    severity: Severity = "error"
    category: str | None = None


# -------------------------
# Parser
# -------------------------

PARSER_UNTERMINATED_NOTE_GROUP: Final[DiagnosticSpec] = DiagnosticSpec(
    code="unterminated-note-group",
    message="Unterminated note group: missing `)`.",
    hint="Close the note group with `)` on the same line.",
    severity="error",
    category="parser",
)

PARSER_UNTERMINATED_ATTRIBUTE: Final[DiagnosticSpec] = DiagnosticSpec(
    code="unterminated-attribute",
    message="Unterminated attribute: missing `]`.",
    hint="Write attributes as `[name:value]`.",
    severity="error",
    category="parser",
)

PARSER_UNRECOGNIZED_CHARACTER: Final[DiagnosticSpec] = DiagnosticSpec(
    code="unrecognized-gabc-character",
    message="Unrecognized character in note group.",
    severity="info",
    category="parser",
)

PARSER_NABC_INVALID_DESCRIPTOR: Final[DiagnosticSpec] = DiagnosticSpec(
    code="nabc-invalid-descriptor",
    message="Unrecognized NABC glyph descriptor.",
    hint="NABC glyphs start with a two-letter code such as `vi`, `pu`, `ta` or `cl`.",
    severity="warning",
    category="nabc",
)

HEADER_UNRECOGNIZED_LINE: Final[DiagnosticSpec] = DiagnosticSpec(
    code="unrecognized-header-line",
    message="Line in the header section is not a `name: value;` declaration.",
    hint="Header names may only contain letters, digits and `-`.",
    severity="warning",
    category="headers",
)

HEADER_MISSING_SEMICOLON: Final[DiagnosticSpec] = DiagnosticSpec(
    code="header-missing-semicolon",
    message="Header value is not terminated by `;`.",
    hint="End every header declaration with `;`.",
    severity="warning",
    category="headers",
)

# -------------------------
# Validation rules
# -------------------------

RULE_MISSING_NAME_HEADER: Final[DiagnosticSpec] = DiagnosticSpec(
    code="missing-name-header",
    message=(
        "no name specified, put 'name:...;' at the beginning of the file, "
        "can be dangerous with some output formats"
    ),
    hint="Add `name: <title>;` to the header section.",
    severity="warning",
    category="headers",
)

RULE_DUPLICATE_HEADER: Final[DiagnosticSpec] = DiagnosticSpec(
    code="duplicate-header",
    message="Several {name} definitions found, only the last will be taken into consideration",
    severity="warning",
    category="headers",
)

RULE_LINE_BREAK_ON_FIRST_SYLLABLE: Final[DiagnosticSpec] = DiagnosticSpec(
    code="line-break-on-first-syllable",
    message="line break is not supported on the first syllable",
    severity="error",
    category="structure",
)

RULE_CLEF_CHANGE_ON_FIRST_SYLLABLE: Final[DiagnosticSpec] = DiagnosticSpec(
    code="clef-change-on-first-syllable",
    message="clef change is not supported on the first syllable",
    hint="Declare the initial clef once, before the first syllable.",
    severity="error",
    category="structure",
)

RULE_PIPE_WITHOUT_NABC_LINES: Final[DiagnosticSpec] = DiagnosticSpec(
    code="pipe-without-nabc-lines",
    message="pipe '|' in note group without `nabc-lines` header",
    hint="Add `nabc-lines: 1;` to the header section.",
    severity="error",
    category="nabc",
)

RULE_NABC_ALTERNATION_MISMATCH: Final[DiagnosticSpec] = DiagnosticSpec(
    code="nabc-alternation-mismatch",
    message=(
        "NABC alternation mismatch: found {found} NABC segment(s) "
        "but 'nabc-lines: {declared};' declares {declared}"
    ),
    severity="error",
    category="nabc",
)

RULE_INVALID_NABC_LINES: Final[DiagnosticSpec] = DiagnosticSpec(
    code="invalid-nabc-lines",
    message="invalid `nabc-lines` value (must be a positive integer)",
    severity="error",
    category="nabc",
)

RULE_INVALID_STAFF_LINES: Final[DiagnosticSpec] = DiagnosticSpec(
    code="invalid-staff-lines",
    message="invalid number of staff lines (must be between 2 and 5)",
    severity="error",
    category="headers",
)

RULE_QUILISMA_EQUAL_OR_LOWER: Final[DiagnosticSpec] = DiagnosticSpec(
    code="quilisma-equal-or-lower",
    message="quilisma followed by a note of equal or lower pitch",
    hint="A quilisma is normally followed by a higher note, as in `{example}`.",
    severity="warning",
    category="pitch",
)

RULE_QUILISMA_PES_PRECEDED_BY_HIGHER: Final[DiagnosticSpec] = DiagnosticSpec(
    code="quilisma-pes-preceded-by-higher",
    message="quilisma pes preceded by a note of equal or higher pitch",
    severity="warning",
    category="pitch",
)

RULE_VIRGA_STRATA_EQUAL_OR_HIGHER: Final[DiagnosticSpec] = DiagnosticSpec(
    code="virga-strata-equal-or-higher",
    message="virga strata followed by a note of equal or higher pitch",
    severity="warning",
    category="pitch",
)

RULE_NABC_UNBALANCED_PITCH: Final[DiagnosticSpec] = DiagnosticSpec(
    code="nabc-unbalanced-pitch-descriptors",
    message="pitch descriptors must be present on all or none of the fused glyphs",
    hint="Add an `h<pitch>` descriptor to every glyph of `{chain}` or remove them all.",
    severity="warning",
    category="nabc",
)

RULE_NABC_FUSION_MODIFIER_PLACEMENT: Final[DiagnosticSpec] = DiagnosticSpec(
    code="nabc-fusion-modifier-placement",
    message="glyph modifiers are only allowed on the last glyph of a fusion",
    hint="Move the modifiers of `{chain}` to its last glyph.",
    severity="warning",
    category="nabc",
)

RULE_QUILISMA_MISSING_CONNECTOR: Final[DiagnosticSpec] = DiagnosticSpec(
    code="quilisma-missing-connector",
    message="quilismatic run without a connector",
    hint="Consider writing `{example}` to connect the quilisma.",
    severity="info",
    category="notation",
)

# -------------------------
# Semantic analysis
# -------------------------

SEMANTIC_PES_QUADRATUM_MISSING_NOTE: Final[DiagnosticSpec] = DiagnosticSpec(
    code="pes-quadratum-missing-note",
    message="pes quadratum requires a following note",
    hint="Add a second note, as in `{example}`, or fuse it with `@`.",
    severity="warning",
    category="notation",
)

SEMANTIC_QUILISMA_MISSING_NOTE: Final[DiagnosticSpec] = DiagnosticSpec(
    code="quilisma-missing-note",
    message="quilisma requires a following note",
    hint="Add a higher note, as in `{example}`, or fuse it with `@`.",
    severity="warning",
    category="notation",
)

SEMANTIC_ORISCUS_SCAPUS_ISOLATED: Final[DiagnosticSpec] = DiagnosticSpec(
    code="oriscus-scapus-isolated",
    message="oriscus scapus cannot stand alone, it requires a preceding and a following note",
    severity="warning",
    category="notation",
)

SEMANTIC_ORISCUS_SCAPUS_MISSING_PRECEDING: Final[DiagnosticSpec] = DiagnosticSpec(
    code="oriscus-scapus-missing-preceding",
    message="oriscus scapus requires a preceding note",
    severity="warning",
    category="notation",
)

SEMANTIC_ORISCUS_SCAPUS_MISSING_SUBSEQUENT: Final[DiagnosticSpec] = DiagnosticSpec(
    code="oriscus-scapus-missing-subsequent",
    message="oriscus scapus requires a following note",
    severity="warning",
    category="notation",
)

SEMANTIC_NABC_CONFLICTING_LIQUESCENCE: Final[DiagnosticSpec] = DiagnosticSpec(
    code="nabc-conflicting-liquescence",
    message="NABC glyph `{glyph}` combines augmentive (`>`) and diminutive (`~`) liquescence",
    severity="error",
    category="nabc",
)

SEMANTIC_NABC_INVALID_PITCH: Final[DiagnosticSpec] = DiagnosticSpec(
    code="nabc-invalid-pitch",
    message="invalid NABC pitch descriptor `h{pitch}` (must be a letter from a to n, or p)",
    severity="error",
    category="nabc",
)

SEMANTIC_NABC_UNKNOWN_SIGNIFICANT_LETTER: Final[DiagnosticSpec] = DiagnosticSpec(
    code="nabc-unknown-significant-letter",
    message="unknown {family} significant letter `{letters}`",
    severity="warning",
    category="nabc",
)

SEMANTIC_NABC_INVALID_LETTER_POSITION: Final[DiagnosticSpec] = DiagnosticSpec(
    code="nabc-invalid-letter-position",
    message="invalid significant letter position {position} for `{descriptor}`",
    hint="Positions range from 1 to 9; Tironian notes do not use position 5.",
    severity="warning",
    category="nabc",
)

SEMANTIC_NABC_PUNCTIS_MISSING_COUNT: Final[DiagnosticSpec] = DiagnosticSpec(
    code="nabc-punctis-missing-count",
    message="`{descriptor}` does not say how many puncta it stands for",
    hint="Add a repetition count, as in `{descriptor}2`.",
    severity="warning",
    category="nabc",
)
