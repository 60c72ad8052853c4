"""Value types stored in the dialogue state.

Every variable of the dialogue state takes a :class:`Value`.  Values are
immutable and hashable so that they can be collected in sets, used as keys of
probability tables and shared between effects without copying.  The concrete
variants are:

* :class:`StringVal` – free text, the most common value of dialogue variables.
* :class:`DoubleVal` – numbers (integers are stored as floats).
* :class:`BooleanVal` – ``true`` / ``false``.
* :class:`NoneVal` – the distinguished empty value, see :func:`none`.
* :class:`SetVal` – an unordered collection of values.
* :class:`ArrayVal` – a fixed-length numeric vector backed by NumPy.

Values are ordered by their hash code.  The order is total but carries no
meaning beyond making sorting deterministic within one process.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import Any, FrozenSet

import numpy as np

from .errors import InvalidOperationError

_NUMBER_PATTERN = re.compile(r"^[-+]?(\d+\.?\d*|\.\d+)([eE][-+]?\d+)?$")


class Value:
    """Base class of all values."""

    __slots__ = ()

    def length(self) -> int:
        raise NotImplementedError

    def contains(self, subvalue: "Value") -> bool:
        return False

    def concatenate(self, other: "Value") -> "Value":
        raise InvalidOperationError("concatenate", self, other)

    def copy(self) -> "Value":
        # Values are immutable, sharing the instance is safe.
        return self

    def __add__(self, other: "Value") -> "Value":
        return self.concatenate(other)

    def __lt__(self, other: object) -> bool:
        if not isinstance(other, Value):
            return NotImplemented
        return (hash(self), str(self)) < (hash(other), str(other))

    def __le__(self, other: object) -> bool:
        if not isinstance(other, Value):
            return NotImplemented
        return self == other or self < other

    def __gt__(self, other: object) -> bool:
        if not isinstance(other, Value):
            return NotImplemented
        return other < self

    def __ge__(self, other: object) -> bool:
        if not isinstance(other, Value):
            return NotImplemented
        return self == other or other < self


@dataclass(frozen=True)
class NoneVal(Value):
    """The empty value.  Use :func:`none` rather than instantiating it."""

    def length(self) -> int:
        return 0

    def concatenate(self, other: Value) -> Value:
        return other

    def __str__(self) -> str:
        return "None"


_NONE = NoneVal()


def none() -> NoneVal:
    """Return the shared :class:`NoneVal` instance."""

    return _NONE


@dataclass(frozen=True)
class StringVal(Value):
    value: str

    def length(self) -> int:
        return len(self.value)

    def contains(self, subvalue: Value) -> bool:
        return str(subvalue) in self.value

    def concatenate(self, other: Value) -> Value:
        if isinstance(other, NoneVal):
            return self
        if isinstance(other, (StringVal, DoubleVal, BooleanVal)):
            return StringVal(f"{self.value} {other}")
        if isinstance(other, SetVal):
            return other.concatenate(self)
        raise InvalidOperationError("concatenate", self, other)

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class DoubleVal(Value):
    value: float

    def __post_init__(self) -> None:
        object.__setattr__(self, "value", float(self.value))

    def length(self) -> int:
        return 1

    def concatenate(self, other: Value) -> Value:
        if isinstance(other, NoneVal):
            return self
        if isinstance(other, DoubleVal):
            return DoubleVal(self.value + other.value)
        if isinstance(other, StringVal):
            return StringVal(f"{self} {other.value}")
        if isinstance(other, (SetVal, ArrayVal)):
            return other.concatenate(self)
        raise InvalidOperationError("concatenate", self, other)

    def __str__(self) -> str:
        if self.value.is_integer():
            return str(int(self.value))
        return repr(self.value)


@dataclass(frozen=True)
class BooleanVal(Value):
    value: bool

    def length(self) -> int:
        return 1

    def concatenate(self, other: Value) -> Value:
        if isinstance(other, NoneVal):
            return self
        if isinstance(other, SetVal):
            return other.concatenate(self)
        raise InvalidOperationError("concatenate", self, other)

    def __str__(self) -> str:
        return "true" if self.value else "false"


@dataclass(frozen=True)
class SetVal(Value):
    """Unordered collection of values."""

    values: FrozenSet[Value] = field(default_factory=frozenset)

    def __post_init__(self) -> None:
        object.__setattr__(self, "values", frozenset(create_value(v) for v in self.values))

    def length(self) -> int:
        return len(self.values)

    def contains(self, subvalue: Value) -> bool:
        return subvalue in self.values

    def without(self, value: Value) -> "SetVal":
        """Return a new set equal to this one minus ``value``."""

        return SetVal(self.values - {value})

    def concatenate(self, other: Value) -> Value:
        if isinstance(other, NoneVal):
            return self
        if isinstance(other, SetVal):
            return SetVal(self.values | other.values)
        return SetVal(self.values | {other})

    def __str__(self) -> str:
        return "[" + ",".join(sorted(str(v) for v in self.values)) + "]"


@dataclass(frozen=True, eq=False)
class ArrayVal(Value):
    """Numeric vector, stored as a read-only float array."""

    array: np.ndarray

    def __post_init__(self) -> None:
        array = np.array(self.array, dtype=float).ravel()
        array.setflags(write=False)
        object.__setattr__(self, "array", array)

    def length(self) -> int:
        return int(self.array.size)

    def contains(self, subvalue: Value) -> bool:
        if isinstance(subvalue, DoubleVal):
            return bool(np.any(self.array == subvalue.value))
        return False

    def concatenate(self, other: Value) -> Value:
        if isinstance(other, NoneVal):
            return self
        if isinstance(other, ArrayVal):
            return ArrayVal(np.concatenate([self.array, other.array]))
        if isinstance(other, DoubleVal):
            return ArrayVal(np.append(self.array, other.value))
        raise InvalidOperationError("concatenate", self, other)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ArrayVal):
            return NotImplemented
        return bool(np.array_equal(self.array, other.array))

    def __hash__(self) -> int:
        return hash(tuple(self.array.tolist()))

    def __str__(self) -> str:
        return "[" + ",".join(str(DoubleVal(v)) for v in self.array.tolist()) + "]"


def create_value(obj: Any) -> Value:
    """Create a :class:`Value` from a Python object or from its text form.

    Text is interpreted as follows: ``None`` is the empty value, ``true`` and
    ``false`` are booleans, numeric literals are doubles, and a bracketed list
    ``[a,b,c]`` is an array when every item is numeric and a set otherwise.
    Any other text is a string.
    """

    if isinstance(obj, Value):
        return obj
    if obj is None:
        return none()
    if isinstance(obj, (bool, np.bool_)):
        return BooleanVal(bool(obj))
    if isinstance(obj, (int, float, np.number)):
        return DoubleVal(float(obj))
    if isinstance(obj, np.ndarray):
        return ArrayVal(obj)
    if isinstance(obj, (set, frozenset, list, tuple)):
        return SetVal(frozenset(create_value(item) for item in obj))
    return _create_from_text(str(obj))


def _create_from_text(text: str) -> Value:
    stripped = text.strip()
    if stripped == "None":
        return none()
    lowered = stripped.lower()
    if lowered in {"true", "false"}:
        return BooleanVal(lowered == "true")
    if _NUMBER_PATTERN.match(stripped):
        return DoubleVal(float(stripped))
    if stripped.startswith("[") and stripped.endswith("]"):
        items = [item.strip() for item in stripped[1:-1].split(",") if item.strip()]
        if items and all(_NUMBER_PATTERN.match(item) for item in items):
            return ArrayVal(np.array([float(item) for item in items]))
        return SetVal(frozenset(_create_from_text(item) for item in items))
    return StringVal(stripped)


__all__ = [
    "ArrayVal",
    "BooleanVal",
    "DoubleVal",
    "NoneVal",
    "SetVal",
    "StringVal",
    "Value",
    "create_value",
    "none",
]
