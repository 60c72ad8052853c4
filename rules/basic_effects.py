"""Atomic effects: one assignment, negation or addition on a single variable.

A basic effect comes in two shapes:

* :class:`ResolvedEffect` – variable and value are fully known.
* :class:`TemplateEffect` – variable and/or value still contain ``{slot}``
  placeholders that must be filled from a grounding assignment.

Both shapes are frozen dataclasses.  Grounding and conversion to a condition
are implemented as functions dispatching on the shape so that every call site
handles both of them explicitly.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Union

from core.assignment import Assignment
from core.templates import Template
from core.values import Value, create_value

from .conditions import BasicCondition, Condition, Relation

DEFAULT_PRIORITY = 1


def _operator(add: bool, negated: bool) -> str:
    if add:
        return "+="
    if negated:
        return "!="
    return ":="


@dataclass(frozen=True)
class ResolvedEffect:
    """Basic effect over a concrete variable and value."""

    variable: str
    value: Value
    priority: int = DEFAULT_PRIORITY
    add: bool = False
    negated: bool = False

    def __post_init__(self) -> None:
        object.__setattr__(self, "value", create_value(self.value))

    def get_variable(self) -> str:
        return self.variable

    def get_value(self) -> Value:
        return self.value

    def is_add(self) -> bool:
        return self.add

    def is_negated(self) -> bool:
        return self.negated

    def contains_slots(self) -> bool:
        return False

    def ground(self, grounding: Assignment) -> "BasicEffect":
        return ground_basic_effect(self, grounding)

    def convert_to_condition(self) -> Condition:
        return basic_effect_to_condition(self)

    def copy(self) -> "ResolvedEffect":
        return ResolvedEffect(self.variable, self.value.copy(), self.priority, self.add, self.negated)

    def __str__(self) -> str:
        return f"{self.variable}{_operator(self.add, self.negated)}{self.value}"


@dataclass(frozen=True)
class TemplateEffect:
    """Basic effect whose variable or value contains slots."""

    variable: Template
    value: Template
    priority: int = DEFAULT_PRIORITY
    add: bool = False
    negated: bool = False

    def __post_init__(self) -> None:
        if isinstance(self.variable, str):
            object.__setattr__(self, "variable", Template(self.variable))
        if isinstance(self.value, str):
            object.__setattr__(self, "value", Template(self.value))

    @property
    def value_template(self) -> Template:
        return self.value

    @property
    def slots(self) -> set[str]:
        return self.variable.get_slots() | self.value.get_slots()

    def get_variable(self) -> str:
        return str(self.variable)

    def get_value(self) -> Value:
        return create_value(self.value.text)

    def is_add(self) -> bool:
        return self.add

    def is_negated(self) -> bool:
        return self.negated

    def contains_slots(self) -> bool:
        return self.variable.is_underspecified() or self.value.is_underspecified()

    def ground(self, grounding: Assignment) -> "BasicEffect":
        return ground_basic_effect(self, grounding)

    def convert_to_condition(self) -> Condition:
        return basic_effect_to_condition(self)

    def copy(self) -> "TemplateEffect":
        return TemplateEffect(self.variable, self.value, self.priority, self.add, self.negated)

    def __str__(self) -> str:
        return f"{self.variable}{_operator(self.add, self.negated)}{self.value}"


BasicEffect = Union[ResolvedEffect, TemplateEffect]


def ground_basic_effect(effect: BasicEffect, grounding: Assignment) -> BasicEffect:
    """Fill the slots of ``effect`` from ``grounding``.

    The result is a :class:`ResolvedEffect` once no slot remains.  Otherwise a
    new :class:`TemplateEffect` is returned which still reports
    :meth:`~TemplateEffect.contains_slots`, and callers are expected to filter
    it out.
    """

    if isinstance(effect, ResolvedEffect):
        return effect
    if isinstance(effect, TemplateEffect):
        variable = effect.variable.fill_slots(grounding)
        value = effect.value.fill_slots(grounding)
        if variable.is_underspecified() or value.is_underspecified():
            return TemplateEffect(variable, value, effect.priority, effect.add, effect.negated)
        return ResolvedEffect(
            variable.text, create_value(value.text), effect.priority, effect.add, effect.negated
        )
    raise TypeError(f"Unsupported basic effect: {type(effect)!r}")


def basic_effect_to_condition(effect: BasicEffect) -> Condition:
    """Return the condition that holds once ``effect`` has been applied."""

    if effect.add:
        relation = Relation.CONTAINS
    elif effect.negated:
        relation = Relation.UNEQUAL
    else:
        relation = Relation.EQUAL
    if isinstance(effect, ResolvedEffect):
        return BasicCondition(Template(effect.variable), effect.value, relation)
    if isinstance(effect, TemplateEffect):
        return BasicCondition(effect.variable, effect.value, relation)
    raise TypeError(f"Unsupported basic effect: {type(effect)!r}")


__all__ = [
    "BasicEffect",
    "DEFAULT_PRIORITY",
    "ResolvedEffect",
    "TemplateEffect",
    "basic_effect_to_condition",
    "ground_basic_effect",
]
