"""Validation modes and configuration options."""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from gabcpy.validation.rules import ValidationRule


class ValidationMode(StrEnum):
    """Top-level validation behavior profile."""

    STRICT = "strict"
    PERMISSIVE = "permissive"


@dataclass(frozen=True, slots=True)
class ValidationOptions:
    """Which rules run. Passed to every `validate` call; never mutated."""

    mode: ValidationMode = ValidationMode.STRICT
    disabled_rules: frozenset[str] = frozenset()
    include_info: bool = True

    @staticmethod
    def for_mode(mode: ValidationMode) -> "ValidationOptions":
        if mode == ValidationMode.PERMISSIVE:
            return ValidationOptions(mode=mode, include_info=False)
        return ValidationOptions(mode=mode, include_info=True)

    def with_rule_enabled(self, name: str, enabled: bool) -> "ValidationOptions":
        disabled = self.disabled_rules - {name} if enabled else self.disabled_rules | {name}
        return ValidationOptions(mode=self.mode, disabled_rules=disabled, include_info=self.include_info)

    def is_enabled(self, rule: ValidationRule) -> bool:
        if rule.name in self.disabled_rules:
            return False
        if self.mode == ValidationMode.PERMISSIVE and rule.confidence == "heuristic":
            return False
        if not self.include_info and rule.severity == "info":
            return False
        return True
