"""Rule engine entrypoint."""

from __future__ import annotations

from collections.abc import Sequence
import logging

from gabcpy.diagnostics import Diagnostic
from gabcpy.model import Document
from gabcpy.validation.options import ValidationOptions
from gabcpy.validation.rules import (
    ValidationRule,
    default_validation_rules,
    rule_contract_violation,
)

logger = logging.getLogger(__name__)


def validate(
    document: Document,
    options: ValidationOptions | None = None,
    *,
    rules: Sequence[ValidationRule] | None = None,
) -> list[Diagnostic]:
    """Parse errors followed by every enabled rule's findings, in registration order.

    A rule that raises, or that breaks the rule contract, is logged and skipped;
    the remaining rules still run.
    """
    resolved_options = options if options is not None else ValidationOptions()
    resolved_rules = _runnable_rules(rules)
    _warn_unknown_rule_names(resolved_options, resolved_rules)

    diagnostics = list(document.errors)
    for rule in resolved_rules:
        if not resolved_options.is_enabled(rule):
            logger.debug("skipping disabled rule %s", rule.name)
            continue
        try:
            findings = rule.run(document)
        except Exception:
            logger.exception("validation rule %s failed; skipping it", rule.name)
            continue
        diagnostics.extend(findings)
    return diagnostics


def filter_findings(
    diagnostics: Sequence[Diagnostic],
    options: ValidationOptions | None = None,
    *,
    rules: Sequence[ValidationRule] | None = None,
) -> list[Diagnostic]:
    """Drop findings that options switch off.

    A finding whose code belongs to a disabled rule is dropped, and so is any
    info finding when `include_info` is off. Codes no rule owns are kept.
    """
    resolved_options = options if options is not None else ValidationOptions()
    owners = {rule.code: rule for rule in _runnable_rules(rules)}
    kept: list[Diagnostic] = []
    for diagnostic in diagnostics:
        owner = owners.get(diagnostic.code)
        if owner is not None and not resolved_options.is_enabled(owner):
            continue
        if not resolved_options.include_info and diagnostic.severity == "info":
            continue
        kept.append(diagnostic)
    return kept


def available_rule_names(rules: Sequence[ValidationRule] | None = None) -> list[str]:
    resolved_rules = tuple(rules) if rules is not None else default_validation_rules()
    return [rule.name for rule in resolved_rules]


def _runnable_rules(rules: Sequence[ValidationRule] | None) -> tuple[ValidationRule, ...]:
    if rules is None:
        return default_validation_rules()
    runnable: list[ValidationRule] = []
    names: set[str] = set()
    for rule in rules:
        violation = rule_contract_violation(rule, names)
        if violation is not None:
            logger.error("skipping validation rule: %s", violation)
            continue
        names.add(rule.name)
        runnable.append(rule)
    return tuple(runnable)


def _warn_unknown_rule_names(options: ValidationOptions, rules: Sequence[ValidationRule]) -> None:
    known = {rule.name for rule in rules}
    for name in sorted(options.disabled_rules - known):
        logger.warning("disabled rule %s is not registered", name)
