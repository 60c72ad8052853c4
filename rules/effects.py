"""Complex effects: sets of basic effects combined by an implicit AND.

An :class:`Effect` is what a rule produces when it fires.  It is grounded
against the rule's bindings, queried per variable to obtain the new values
(taking priorities and negations into account) and can be turned into the
condition stating that its outcome already holds.

The text form joins basic effects with ``" ^ "``::

    a_m:=Greet ^ u_u+=hello ^ i_u!=Confirm

and the empty effect is written ``Void``.
"""

from __future__ import annotations

import sys
from functools import cached_property, reduce
from typing import FrozenSet, Iterable, Iterator, NamedTuple, Optional, Tuple, Union

from core.assignment import Assignment
from core.errors import InvalidOperationError
from core.logging_config import get_logger
from core.templates import Template
from core.values import SetVal, Value, create_value, none

from .basic_effects import BasicEffect, ResolvedEffect, TemplateEffect
from .conditions import BinaryOperator, ComplexCondition, Condition, VoidCondition
from .errors import EffectParseError

logger = get_logger("rules.effects")

VOID = "Void"
SEPARATOR = " ^ "
# Checked in this order; the first operator found splits the text.
OPERATORS = (":=", "!=", "+=")
EMPTY_VALUE = "{}"


class _Resolution(NamedTuple):
    """Accumulator of the per-variable priority fold."""

    best_priority: int
    values: FrozenSet[Value]


_INITIAL_RESOLUTION = _Resolution(sys.maxsize, frozenset())


def _fold_priority(acc: _Resolution, effect: BasicEffect) -> _Resolution:
    if effect.priority > acc.best_priority:
        return acc
    values = acc.values if effect.priority == acc.best_priority else frozenset()
    value = effect.get_value()
    if effect.negated:
        values = frozenset(
            v.without(value) if isinstance(v, SetVal) and v.contains(value) else v
            for v in values
            if v != value
        )
    elif value != none():
        values = values | {value}
    return _Resolution(effect.priority, values)


class Effect(Value):
    """Deduplicated collection of basic effects.

    Members are normalised at construction: non-negated effects come before
    negated ones, so that within one priority level the values to subtract
    from are always collected first.
    """

    def __init__(self, effects: Union[BasicEffect, Iterable[BasicEffect], None] = None) -> None:
        if effects is None:
            members: Tuple[BasicEffect, ...] = ()
        elif isinstance(effects, (ResolvedEffect, TemplateEffect)):
            members = (effects,)
        else:
            ordered = sorted(effects, key=lambda e: e.negated)
            members = tuple(dict.fromkeys(ordered))
        self._subeffects = members

    # ------------------------------------------------------------------ getters
    def get_sub_effects(self) -> Tuple[BasicEffect, ...]:
        return self._subeffects

    def is_fully_grounded(self) -> bool:
        return all(not e.contains_slots() for e in self._subeffects)

    def get_value_slots(self) -> set[str]:
        """Slots appearing in the values of template members."""

        slots: set[str] = set()
        for effect in self._subeffects:
            if isinstance(effect, TemplateEffect):
                slots |= effect.value_template.get_slots()
        return slots

    def get_output_variables(self) -> set[str]:
        return {e.get_variable() for e in self._subeffects}

    def get_values(self, variable: str) -> set[Value]:
        """Return the values the effect sets for ``variable``.

        Only members with the best (lowest) priority are kept.  Among those,
        positive members contribute their value and negated members remove
        theirs, including from inside set values.  The empty value is never
        returned.
        """

        members = (e for e in self._subeffects if e.get_variable() == variable)
        return set(reduce(_fold_priority, members, _INITIAL_RESOLUTION).values)

    def is_add(self, variable: str) -> bool:
        """True if the values for ``variable`` are added rather than replaced."""

        found_add = False
        for effect in self._subeffects:
            if effect.get_variable() != variable:
                continue
            if effect.add:
                found_add = True
            elif effect.get_value().length() > 0 and not effect.negated:
                return False
        return found_add

    def get_assignment(self) -> Assignment:
        """Return the new values as an assignment over primed variables."""

        assignment = Assignment()
        for effect in self._subeffects:
            assignment.add_pair(effect.get_variable() + "'", effect.get_value())
        return assignment

    # ---------------------------------------------------------------- grounding
    def ground(self, grounding: Assignment) -> "Effect":
        """Fill the slots of every member from ``grounding``.

        Members that still contain slots afterwards are dropped: a rule may be
        applied with only part of its slots bound.
        """

        if self.is_fully_grounded():
            return self
        grounded = [e.ground(grounding) for e in self._subeffects]
        kept = [e for e in grounded if not e.contains_slots()]
        if len(kept) < len(grounded):
            logger.debug(
                "Dropped %d ungroundable effect(s) from '%s' with grounding %s",
                len(grounded) - len(kept),
                self,
                grounding,
            )
        return Effect(kept)

    # ------------------------------------------------------------------ duality
    @cached_property
    def condition(self) -> Condition:
        conditions = [e.convert_to_condition() for e in self._subeffects]
        if not conditions:
            return VoidCondition()
        if len(conditions) == 1:
            return conditions[0]
        operator = BinaryOperator.OR if len(self.get_output_variables()) == 1 else BinaryOperator.AND
        return ComplexCondition(tuple(conditions), operator)

    def convert_to_condition(self) -> Condition:
        """Return the condition stating that the effect's outcome holds."""

        return self.condition

    # ------------------------------------------------------------- value methods
    def concatenate(self, other: Value) -> "Effect":
        if not isinstance(other, Effect):
            raise InvalidOperationError("concatenate", self, other)
        return Effect(self._subeffects + other.get_sub_effects())

    def length(self) -> int:
        return len(self._subeffects)

    def contains(self, subvalue: Value) -> bool:
        return False

    def copy(self) -> "Effect":
        return Effect([e.copy() for e in self._subeffects])

    def __len__(self) -> int:
        return len(self._subeffects)

    def __iter__(self) -> Iterator[BasicEffect]:
        return iter(self._subeffects)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Effect):
            return NotImplemented
        return frozenset(self._subeffects) == frozenset(other._subeffects)

    def __hash__(self) -> int:
        return hash(frozenset(self._subeffects))

    def __str__(self) -> str:
        if not self._subeffects:
            return VOID
        return SEPARATOR.join(str(e) for e in self._subeffects)

    def __repr__(self) -> str:
        return f"Effect({str(self)!r})"


def parse_effect(text: str, *, strict: bool = True) -> Effect:
    """Parse the text form of an effect.

    Whitespace around the variable and the value is stripped, so
    ``x := y`` is read (and printed back) as ``x:=y``.

    Every parsed member gets the default priority.  With ``strict`` (the
    default) a segment without any operator raises :class:`EffectParseError`;
    otherwise it yields a member with an empty variable and value.
    """

    if SEPARATOR in text:
        members: list[BasicEffect] = []
        for segment in text.split(SEPARATOR):
            members.extend(parse_effect(segment, strict=strict).get_sub_effects())
        return Effect(members)

    if VOID in text:
        return Effect()

    operator: Optional[str] = next((op for op in OPERATORS if op in text), None)
    if operator is None:
        if strict:
            raise EffectParseError(text, "expected ':=', '!=', '+=' or 'Void'")
        logger.warning("No operator found in effect '%s', using empty variable and value", text)
        variable, value = "", ""
    else:
        variable, _, value = text.partition(operator)
        if operator == ":=" and EMPTY_VALUE in value:
            value = str(none())

    add = operator == "+="
    negated = operator == "!="
    tvariable = Template(variable)
    tvalue = Template(value)
    if tvariable.is_underspecified() or tvalue.is_underspecified():
        return Effect(TemplateEffect(tvariable, tvalue, add=add, negated=negated))
    return Effect(ResolvedEffect(tvariable.text, create_value(tvalue.text), add=add, negated=negated))


__all__ = ["Effect", "parse_effect"]
