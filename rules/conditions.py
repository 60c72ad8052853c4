"""Conditions guarding rules, and the duals of effects."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Tuple, Union

from core.assignment import Assignment
from core.templates import Template
from core.values import Value, create_value


class Relation(str, Enum):
    """Relation tested by a :class:`BasicCondition`."""

    EQUAL = "="
    UNEQUAL = "!="
    CONTAINS = "contains"


class BinaryOperator(str, Enum):
    AND = "^"
    OR = "v"


@dataclass(frozen=True)
class VoidCondition:
    """Condition that is always satisfied."""

    def is_satisfied_by(self, assignment: Assignment) -> bool:
        return True

    def get_input_variables(self) -> set[str]:
        return set()

    def __str__(self) -> str:
        return "true"


@dataclass(frozen=True)
class BasicCondition:
    """Test of one variable against a value.

    Both the variable and the value may be templates; their slots are filled
    from the assignment before the test.
    """

    variable: Template
    value: Union[Value, Template]
    relation: Relation = Relation.EQUAL

    def __post_init__(self) -> None:
        if isinstance(self.variable, str):
            object.__setattr__(self, "variable", Template(self.variable))
        if not isinstance(self.value, (Value, Template)):
            object.__setattr__(self, "value", create_value(self.value))

    def get_input_variables(self) -> set[str]:
        variables = {str(self.variable)} if not self.variable.is_underspecified() else set()
        variables |= self.variable.get_slots()
        if isinstance(self.value, Template):
            variables |= self.value.get_slots()
        return variables

    def is_satisfied_by(self, assignment: Assignment) -> bool:
        variable = str(self.variable.fill_slots(assignment))
        expected = self.value
        if isinstance(expected, Template):
            filled = expected.fill_slots(assignment)
            if filled.is_underspecified():
                return False
            expected = create_value(filled.text)
        actual = assignment.get_value(variable)
        if self.relation == Relation.EQUAL:
            return actual == expected
        if self.relation == Relation.UNEQUAL:
            return actual != expected
        if self.relation == Relation.CONTAINS:
            return actual.contains(expected)
        raise ValueError(f"Unsupported relation '{self.relation}'")

    def __str__(self) -> str:
        if self.relation == Relation.CONTAINS:
            return f"{self.variable} contains {self.value}"
        return f"{self.variable}{self.relation.value}{self.value}"


@dataclass(frozen=True)
class ComplexCondition:
    """Conjunction or disjunction of sub-conditions."""

    conditions: Tuple["Condition", ...] = field(default_factory=tuple)
    operator: BinaryOperator = BinaryOperator.AND

    def __post_init__(self) -> None:
        object.__setattr__(self, "conditions", tuple(self.conditions))

    def get_input_variables(self) -> set[str]:
        variables: set[str] = set()
        for condition in self.conditions:
            variables |= condition.get_input_variables()
        return variables

    def is_satisfied_by(self, assignment: Assignment) -> bool:
        results = (condition.is_satisfied_by(assignment) for condition in self.conditions)
        if self.operator == BinaryOperator.AND:
            return all(results)
        return any(results)

    def __str__(self) -> str:
        joined = f" {self.operator.value} ".join(str(c) for c in self.conditions)
        return f"({joined})"


Condition = Union[VoidCondition, BasicCondition, ComplexCondition]


__all__ = [
    "BasicCondition",
    "BinaryOperator",
    "ComplexCondition",
    "Condition",
    "Relation",
    "VoidCondition",
]
