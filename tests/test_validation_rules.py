from dataclasses import dataclass
import logging

import pytest

from gabcpy import parse, validate
from gabcpy.diagnostics import Diagnostic
from gabcpy.model import Document
from gabcpy.text import Range
from gabcpy.validation import (
    NameHeaderRule,
    ValidationMode,
    ValidationOptions,
    available_rule_names,
    default_validation_rules,
    validate_rule_contracts,
)
from tests._shared_cases import CLEAN_CASES, RULE_CASES, GabcCase, case_id


def _codes(diagnostics: list[Diagnostic]) -> list[str]:
    return [diagnostic.code for diagnostic in diagnostics]


@pytest.mark.parametrize("case", CLEAN_CASES, ids=case_id)
def test_clean_sources_produce_no_findings(case: GabcCase) -> None:
    assert validate(parse(case.source)) == []


@pytest.mark.parametrize("case", RULE_CASES, ids=case_id)
def test_rule_cases_report_expected_codes(case: GabcCase) -> None:
    assert _codes(validate(parse(case.source))) == list(case.expected_codes)


def test_validate_is_idempotent() -> None:
    document = parse("%%\n(c4) A(gwf) B(f|vi)")

    assert validate(document) == validate(document)


def test_parse_errors_come_first() -> None:
    document = parse("%%\n(c4) A(fg")

    assert _codes(validate(document)) == ["unterminated-note-group", "missing-name-header"]


def test_missing_name_header_is_anchored_at_document_start() -> None:
    (diagnostic,) = validate(parse("%%\n(c4) A(f)"))

    assert diagnostic.range == Range.zero()
    assert diagnostic.severity == "warning"
    assert diagnostic.hint is not None


def test_duplicate_header_points_at_last_and_relates_earlier_definitions() -> None:
    document = parse("name: A;\nname: B;\nname: C;\n%%\n")

    (diagnostic,) = validate(document)
    assert diagnostic.message == "Several name definitions found, only the last will be taken into consideration"
    assert diagnostic.range.start.line == 2
    assert [info.range.start.line for info in diagnostic.related_info] == [0, 1]
    assert all(info.message == "Previous name definition" for info in diagnostic.related_info)


def test_line_break_on_first_syllable_reported_once() -> None:
    diagnostics = validate(parse("name: L;\n%%\n(c4) A(f)(z) B(g)"))

    assert _codes(diagnostics) == ["line-break-on-first-syllable"]
    assert diagnostics[0].severity == "error"


def test_line_break_later_is_fine() -> None:
    assert validate(parse("name: L;\n%%\n(c4) A(f) B(g)(z) C(h)")) == []


def test_initial_clef_is_never_a_clef_change() -> None:
    assert validate(parse("name: C;\n%%\n(c4) A(f)")) == []
    assert validate(parse("name: C;\n%%\n(f3) (::) B(g)")) == []


def test_nabc_alternation_mismatch_message_and_range() -> None:
    source = "name: N;\nnabc-lines: 1;\n%%\n(c4) A(f|vi|pu)"

    (diagnostic,) = validate(parse(source))

    assert diagnostic.code == "nabc-alternation-mismatch"
    assert "found 2" in diagnostic.message
    assert "nabc-lines: 1" in diagnostic.message
    assert (diagnostic.range.start.line, diagnostic.range.start.character) == (3, 6)


@pytest.mark.parametrize(
    ("declared", "expected"),
    [(1, 0), (2, 1)],
    ids=["one_line_one_pipe", "two_lines_one_pipe"],
)
def test_nabc_alternation_single_pipe(declared: int, expected: int) -> None:
    source = f"name: N;\nnabc-lines: {declared};\n%%\n(c4) A(f|vi)"

    codes = _codes(validate(parse(source)))

    assert codes.count("nabc-alternation-mismatch") == expected


def test_nabc_alternation_matches_declared_count() -> None:
    source = "name: N;\nnabc-lines: 2;\n%%\n(c4) A(f|vi|pu) B(g)"

    assert validate(parse(source)) == []


def test_pipe_without_header_reported_per_group() -> None:
    source = "name: P;\n%%\n(c4) A(f|vi) B(g|pu) C(h)"

    assert _codes(validate(parse(source))) == ["pipe-without-nabc-lines", "pipe-without-nabc-lines"]


def test_invalid_staff_lines_anchored_at_value() -> None:
    (diagnostic,) = validate(parse("name: S;\nstaff-lines: 9;\n%%\n"))

    assert diagnostic.code == "invalid-staff-lines"
    assert (diagnostic.range.start.line, diagnostic.range.start.character) == (1, 13)


@pytest.mark.parametrize(
    ("nabc", "expected"),
    [("vihk!tahk", 0), ("vihk!ta", 1), ("vi!ta", 0), ("vihk", 0)],
    ids=["all_pitched", "one_missing", "none_pitched", "single_glyph"],
)
def test_fused_glyph_pitch_balance(nabc: str, expected: int) -> None:
    source = f"name: N;\nnabc-lines: 1;\n%%\n(c4) A(f|{nabc})"

    diagnostics = validate(parse(source))

    assert _codes(diagnostics).count("nabc-unbalanced-pitch-descriptors") == expected


def test_modifiers_on_last_fused_glyph_are_allowed() -> None:
    source = "name: N;\nnabc-lines: 1;\n%%\n(c4) A(f|vi!taS)"

    assert validate(parse(source)) == []


def test_quilisma_pitch_findings_carry_related_note() -> None:
    (diagnostic,) = validate(parse("name: Q;\n%%\n(c4) A(gwg)"))

    assert diagnostic.code == "quilisma-equal-or-lower"
    assert [info.message for info in diagnostic.related_info] == ["Following note"]
    assert diagnostic.hint is not None and "gwh" in diagnostic.hint


def test_quilisma_pes_compares_with_previous_syllable() -> None:
    rising = parse("name: Q;\n%%\n(c4) A(f) B(gwh)")
    falling = parse("name: Q;\n%%\n(c4) A(h) B(gwh)")

    assert validate(rising) == []
    (diagnostic,) = validate(falling)
    assert diagnostic.code == "quilisma-pes-preceded-by-higher"
    assert [info.message for info in diagnostic.related_info] == ["Preceding note"]


def test_strict_mode_runs_every_rule_by_default() -> None:
    document = parse("name: C;\n%%\n(c4) A(fgwh) B(gvoh)")

    assert _codes(validate(document)) == ["virga-strata-equal-or-higher", "quilisma-missing-connector"]


def test_permissive_mode_skips_heuristic_rules() -> None:
    document = parse("%%\n(c4) A(fgwh) B(gvoh)")

    diagnostics = validate(document, ValidationOptions.for_mode(ValidationMode.PERMISSIVE))

    assert _codes(diagnostics) == ["missing-name-header"]


def test_info_findings_can_be_excluded() -> None:
    document = parse("name: C;\n%%\n(c4) A(fgwh)")

    assert validate(document, ValidationOptions(include_info=False)) == []


def test_rules_can_be_disabled_by_name() -> None:
    document = parse("%%\n(c4) A(f)")
    options = ValidationOptions().with_rule_enabled("name-header", False)

    assert validate(document, options) == []
    assert _codes(validate(document, options.with_rule_enabled("name-header", True))) == ["missing-name-header"]


def test_unknown_disabled_rule_name_is_logged(caplog: pytest.LogCaptureFixture) -> None:
    options = ValidationOptions(disabled_rules=frozenset({"no-such-rule"}))

    with caplog.at_level(logging.WARNING, logger="gabcpy.validation.validator"):
        validate(parse("name: A;\n%%\n"), options)

    assert "no-such-rule" in caplog.text


@dataclass(frozen=True, slots=True)
class _ExplodingRule:
    code: str = "exploding"
    name: str = "exploding"
    severity: str = "error"
    category: str = "test"
    confidence: str = "policy"

    def run(self, document: Document) -> list[Diagnostic]:
        raise RuntimeError("boom")


def test_failing_rule_is_isolated(caplog: pytest.LogCaptureFixture) -> None:
    rules = (_ExplodingRule(), NameHeaderRule())

    with caplog.at_level(logging.ERROR, logger="gabcpy.validation.validator"):
        diagnostics = validate(parse("%%\n(c4) A(f)"), rules=rules)  # type: ignore[arg-type]

    assert _codes(diagnostics) == ["missing-name-header"]
    assert "exploding" in caplog.text


def test_rule_breaking_contract_is_skipped(caplog: pytest.LogCaptureFixture) -> None:
    rules = (NameHeaderRule(), NameHeaderRule(), _ExplodingRule(confidence="maybe"))

    with caplog.at_level(logging.ERROR, logger="gabcpy.validation.validator"):
        diagnostics = validate(parse("%%\n(c4) A(f)"), rules=rules)  # type: ignore[arg-type]

    assert _codes(diagnostics) == ["missing-name-header"]
    assert "Duplicate rule name `name-header`" in caplog.text
    assert "unknown confidence" in caplog.text


def test_rule_contracts_reject_duplicate_names() -> None:
    try:
        validate_rule_contracts((NameHeaderRule(), NameHeaderRule()))
    except ValueError as exc:
        assert "Duplicate rule name `name-header`" in str(exc)
    else:
        raise AssertionError("Expected ValueError for duplicate rule names")


def test_rule_contracts_reject_unknown_confidence() -> None:
    try:
        validate_rule_contracts((_ExplodingRule(confidence="maybe"),))  # type: ignore[arg-type]
    except ValueError as exc:
        assert "unknown confidence" in str(exc)
    else:
        raise AssertionError("Expected ValueError for unknown confidence")


def test_default_rules_are_registered_in_order() -> None:
    names = available_rule_names()

    assert names[0] == "name-header"
    assert names[-1] == "quilisma-connector"
    assert len(names) == len(set(names)) == len(default_validation_rules()) == 13
    validate_rule_contracts(default_validation_rules())
