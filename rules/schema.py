"""Pydantic models describing the JSON format of rule effects."""

from __future__ import annotations

from enum import Enum
from typing import Any, Dict, List

from pydantic import BaseModel, ConfigDict, Field, RootModel, ValidationError, model_validator

from core.templates import Template
from core.values import create_value, none

from .basic_effects import DEFAULT_PRIORITY, BasicEffect, ResolvedEffect, TemplateEffect
from .effects import Effect
from .errors import EffectValidationError


class EffectOperation(str, Enum):
    """Operation applied by a basic effect."""

    SET = "set"
    DISCARD = "discard"
    ADD = "add"
    CLEAR = "clear"


class BasicEffectSpec(BaseModel):
    """One basic effect as found in an effect document."""

    model_config = ConfigDict(extra="forbid", populate_by_name=True)
    variable: str = Field(..., min_length=1, alias="var")
    value: str = Field(default="", alias="val")
    operation: EffectOperation = EffectOperation.SET
    priority: int = DEFAULT_PRIORITY

    @model_validator(mode="after")
    def _validate_value(self) -> "BasicEffectSpec":
        if self.operation == EffectOperation.CLEAR and self.value not in ("", str(none())):
            raise ValueError("clear effect does not take a 'value' field")
        return self

    def to_basic_effect(self) -> BasicEffect:
        add = self.operation == EffectOperation.ADD
        negated = self.operation == EffectOperation.DISCARD
        value = str(none()) if self.operation == EffectOperation.CLEAR else self.value
        variable_template = Template(self.variable)
        value_template = Template(value)
        if variable_template.is_underspecified() or value_template.is_underspecified():
            return TemplateEffect(variable_template, value_template, self.priority, add, negated)
        return ResolvedEffect(variable_template.text, create_value(value), self.priority, add, negated)

    @classmethod
    def from_basic_effect(cls, effect: BasicEffect) -> "BasicEffectSpec":
        if effect.add:
            operation = EffectOperation.ADD
        elif effect.negated:
            operation = EffectOperation.DISCARD
        elif isinstance(effect, ResolvedEffect) and effect.value == none():
            operation = EffectOperation.CLEAR
        else:
            operation = EffectOperation.SET
        value = "" if operation == EffectOperation.CLEAR else str(effect.value)
        try:
            return cls(
                variable=effect.get_variable(),
                value=value,
                operation=operation,
                priority=effect.priority,
            )
        except ValidationError as exc:
            raise EffectValidationError(f"Effect '{effect}' has no document form: {exc}") from exc


class EffectSpec(BaseModel):
    """Complex effect: a list of basic effects (empty for ``Void``)."""

    model_config = ConfigDict(extra="forbid")
    effects: List[BasicEffectSpec] = Field(default_factory=list)

    def to_effect(self) -> Effect:
        return Effect([spec.to_basic_effect() for spec in self.effects])

    @classmethod
    def from_effect(cls, effect: Effect) -> "EffectSpec":
        return cls(effects=[BasicEffectSpec.from_basic_effect(e) for e in effect.get_sub_effects()])


class NamedEffectSpec(EffectSpec):
    """Effect document entry with an identifier."""

    effect_id: str = Field(..., min_length=1)


class EffectSpecCollection(RootModel[List[NamedEffectSpec]]):
    """Helper root model to validate arrays of named effects."""


def get_effect_json_schema() -> Dict[str, Any]:
    """Return the JSON schema used to validate effect documents."""

    return NamedEffectSpec.model_json_schema()


__all__ = [
    "BasicEffectSpec",
    "EffectOperation",
    "EffectSpec",
    "EffectSpecCollection",
    "NamedEffectSpec",
    "get_effect_json_schema",
]
