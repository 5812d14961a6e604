"""Rule-based validation."""

from gabcpy.validation.findings import compare_pitch
from gabcpy.validation.options import ValidationMode, ValidationOptions
from gabcpy.validation.rules import (
    DuplicateHeadersRule,
    FirstSyllableClefChangeRule,
    FirstSyllableLineBreakRule,
    FusedGlyphModifierPlacementRule,
    FusedGlyphPitchBalanceRule,
    NabcAlternationRule,
    NabcWithoutHeaderRule,
    NameHeaderRule,
    QuilismaConnectorRule,
    QuilismaFollowedByLowerPitchRule,
    QuilismaPesPrecededByHigherPitchRule,
    StaffLinesRule,
    ValidationRule,
    VirgaStrataFollowedByHigherPitchRule,
    default_validation_rules,
    rule_contract_violation,
    validate_rule_contracts,
)
from gabcpy.validation.validator import available_rule_names, filter_findings, validate

__all__ = [
    "DuplicateHeadersRule",
    "FirstSyllableClefChangeRule",
    "FirstSyllableLineBreakRule",
    "FusedGlyphModifierPlacementRule",
    "FusedGlyphPitchBalanceRule",
    "NabcAlternationRule",
    "NabcWithoutHeaderRule",
    "NameHeaderRule",
    "QuilismaConnectorRule",
    "QuilismaFollowedByLowerPitchRule",
    "QuilismaPesPrecededByHigherPitchRule",
    "StaffLinesRule",
    "ValidationMode",
    "ValidationOptions",
    "ValidationRule",
    "VirgaStrataFollowedByHigherPitchRule",
    "available_rule_names",
    "compare_pitch",
    "default_validation_rules",
    "filter_findings",
    "rule_contract_violation",
    "validate",
    "validate_rule_contracts",
]
