"""Custom exceptions raised by the rules/effects subsystem."""

from __future__ import annotations


class EffectValidationError(ValueError):
    """Raised when effect documents fail schema validation."""


class EffectParseError(ValueError):
    """Raised when the text form of an effect cannot be parsed."""

    def __init__(self, text: str, reason: str) -> None:
        super().__init__(f"Cannot parse effect '{text}': {reason}")
        self.text = text
        self.reason = reason


class EffectNotFoundError(KeyError):
    """Raised when a requested effect identifier cannot be resolved."""

    def __init__(self, effect_id: str) -> None:
        super().__init__(f"Effect '{effect_id}' not found")
        self.effect_id = effect_id


__all__ = [
    "EffectNotFoundError",
    "EffectParseError",
    "EffectValidationError",
]
