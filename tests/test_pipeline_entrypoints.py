from pathlib import Path

import pytest

from gabcpy import ValidationMode, ValidationOptions, check, parse, parse_file
from gabcpy.pipeline import run_analyze, run_check, run_validate
from tests._shared_cases import ALLELUIA, CLEAN_CASES, RULE_CASES, GabcCase, case_id


def test_run_validate_reuses_provided_document() -> None:
    parsed = parse(ALLELUIA)

    result = run_validate(ALLELUIA, document=parsed)

    assert result.document is parsed
    assert result.diagnostics == []
    assert result.has_errors is False


def test_run_analyze_rejects_document_from_other_source() -> None:
    parsed = parse("%%\n(c4) A(f)")

    try:
        run_analyze("%%\n(c4) B(g)", document=parsed)
    except ValueError as exc:
        assert "Provided document must be parsed from the same source text" in str(exc)
    else:
        raise AssertionError("Expected ValueError when passing a document for another source")


def test_check_end_to_end_alleluia() -> None:
    result = check(ALLELUIA)

    assert result.diagnostics == []
    assert result.has_errors is False
    assert len(result.document.syllables) == 4
    assert result.document.syllables[0].clef is not None


@pytest.mark.parametrize("case", CLEAN_CASES, ids=case_id)
def test_check_clean_cases(case: GabcCase) -> None:
    assert run_check(case.source).diagnostics == []


@pytest.mark.parametrize("case", RULE_CASES, ids=case_id)
def test_check_reports_overlapping_findings_once(case: GabcCase) -> None:
    codes = [diagnostic.code for diagnostic in run_check(case.source).diagnostics]

    for code in case.expected_codes:
        assert codes.count(code) == 1


def test_check_merges_validation_and_semantic_findings() -> None:
    source = "%%\n(c4) A(eq) B(gwf)"

    result = run_check(source)

    assert [diagnostic.code for diagnostic in result.diagnostics] == [
        "missing-name-header",
        "quilisma-equal-or-lower",
        "pes-quadratum-missing-note",
    ]


def test_check_orders_errors_before_warnings_and_info() -> None:
    source = "nabc-lines: 1;\n%%\n(c4) A(f)(z) B(fgwh|vi|pu)"

    result = run_check(source)

    severities = [diagnostic.severity for diagnostic in result.diagnostics]
    assert severities == sorted(severities, key=["error", "warning", "info"].index)
    assert result.has_errors is True
    assert [diagnostic.code for diagnostic in result.diagnostics][:2] == [
        "line-break-on-first-syllable",
        "nabc-alternation-mismatch",
    ]


def test_check_honours_validation_options() -> None:
    source = "name: C;\n%%\n(c4) A(gvoh)"

    strict = check(source)
    permissive = check(source, ValidationOptions.for_mode(ValidationMode.PERMISSIVE))

    assert [diagnostic.code for diagnostic in strict.diagnostics] == ["virga-strata-equal-or-higher"]
    assert permissive.diagnostics == []


PITCH_FINDINGS = "name: A;\n%%\n(c4) A(fgwh) B(gwf) C(gvoh)"


def _check_codes(source: str, options: ValidationOptions | None = None) -> list[str]:
    return [diagnostic.code for diagnostic in check(source, options).diagnostics]


def test_check_reports_pitch_findings_by_default() -> None:
    assert _check_codes(PITCH_FINDINGS) == [
        "quilisma-equal-or-lower",
        "virga-strata-equal-or-higher",
        "quilisma-missing-connector",
    ]


def test_check_excludes_info_findings_from_both_passes() -> None:
    codes = _check_codes(PITCH_FINDINGS, ValidationOptions(include_info=False))

    assert codes == ["quilisma-equal-or-lower", "virga-strata-equal-or-higher"]


def test_check_permissive_mode_drops_heuristic_findings_from_both_passes() -> None:
    options = ValidationOptions.for_mode(ValidationMode.PERMISSIVE)

    assert _check_codes(PITCH_FINDINGS, options) == []


def test_check_disabled_rules_silence_semantic_repeats() -> None:
    options = (
        ValidationOptions()
        .with_rule_enabled("quilisma-lower-pitch", False)
        .with_rule_enabled("virga-strata-higher-pitch", False)
    )

    assert _check_codes(PITCH_FINDINGS, options) == ["quilisma-missing-connector"]


def test_check_disabled_first_syllable_rule_is_silent() -> None:
    source = "name: L;\n%%\n(c4) A(f)(z) B(g)"
    options = ValidationOptions().with_rule_enabled("first-syllable-line-break", False)

    assert _check_codes(source, options) == []


def test_check_permissive_mode_keeps_semantic_only_findings() -> None:
    options = ValidationOptions.for_mode(ValidationMode.PERMISSIVE)

    assert _check_codes("name: A;\n%%\n(c4) A(eq)", options) == ["pes-quadratum-missing-note"]


def test_parse_file_drops_byte_order_mark(tmp_path: Path) -> None:
    path = tmp_path / "alleluia.gabc"
    path.write_text(ALLELUIA, encoding="utf-8-sig")

    document = parse_file(path)

    assert document.source_text == ALLELUIA
    assert document.header("name") == "Test"
