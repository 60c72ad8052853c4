"""Public package interface for the rules/effects subsystem."""

from .basic_effects import (
    DEFAULT_PRIORITY,
    BasicEffect,
    ResolvedEffect,
    TemplateEffect,
    basic_effect_to_condition,
    ground_basic_effect,
)
from .conditions import (
    BasicCondition,
    BinaryOperator,
    ComplexCondition,
    Condition,
    Relation,
    VoidCondition,
)
from .effects import Effect, parse_effect
from .errors import EffectNotFoundError, EffectParseError, EffectValidationError
from .loader import EffectRepository
from .schema import (
    BasicEffectSpec,
    EffectOperation,
    EffectSpec,
    EffectSpecCollection,
    NamedEffectSpec,
    get_effect_json_schema,
)

__all__ = [
    "BasicCondition",
    "BasicEffect",
    "BasicEffectSpec",
    "BinaryOperator",
    "ComplexCondition",
    "Condition",
    "DEFAULT_PRIORITY",
    "Effect",
    "EffectNotFoundError",
    "EffectOperation",
    "EffectParseError",
    "EffectRepository",
    "EffectSpec",
    "EffectSpecCollection",
    "EffectValidationError",
    "NamedEffectSpec",
    "Relation",
    "ResolvedEffect",
    "TemplateEffect",
    "VoidCondition",
    "basic_effect_to_condition",
    "get_effect_json_schema",
    "ground_basic_effect",
    "parse_effect",
]
