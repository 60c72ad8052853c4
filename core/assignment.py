"""Assignments of values to dialogue variables."""

from __future__ import annotations

from typing import Any, Dict, Iterator, Mapping, Optional

from .values import Value, create_value, none


class Assignment:
    """Mapping of variable names to :class:`Value` objects.

    Assignments are used both as the grounding context of rules (the slots of
    a template are filled from an assignment) and as the output of effects
    (``a_m'=Greet``).  Plain Python values are converted with
    :func:`~core.values.create_value` when added.
    """

    def __init__(self, pairs: Optional[Mapping[str, Any]] = None, **kwargs: Any) -> None:
        self._map: Dict[str, Value] = {}
        if pairs is not None:
            for variable, value in pairs.items():
                self.add_pair(variable, value)
        for variable, value in kwargs.items():
            self.add_pair(variable, value)

    # ---------------------------------------------------------------- mutation
    def add_pair(self, variable: str, value: Any) -> None:
        self._map[variable] = create_value(value)

    def add_assignment(self, other: "Assignment") -> None:
        """Append the pairs of ``other``, overriding existing variables."""

        for variable, value in other.items():
            self._map[variable] = value

    def remove_pair(self, variable: str) -> None:
        self._map.pop(variable, None)

    # ------------------------------------------------------------------ access
    def get_value(self, variable: str) -> Value:
        """Return the value of ``variable``, or the empty value if unassigned."""

        return self._map.get(variable, none())

    def contains_var(self, variable: str) -> bool:
        return variable in self._map

    @property
    def variables(self) -> set[str]:
        return set(self._map)

    def items(self) -> Iterator[tuple[str, Value]]:
        return iter(self._map.items())

    def copy(self) -> "Assignment":
        return Assignment(dict(self._map))

    def __iter__(self) -> Iterator[str]:
        return iter(self._map)

    def __len__(self) -> int:
        return len(self._map)

    def __contains__(self, variable: object) -> bool:
        return variable in self._map

    def __getitem__(self, variable: str) -> Value:
        return self._map[variable]

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Assignment):
            return NotImplemented
        return self._map == other._map

    def __str__(self) -> str:
        return " ^ ".join(f"{variable}={value}" for variable, value in self._map.items())

    def __repr__(self) -> str:
        return f"Assignment({self._map!r})"


__all__ = ["Assignment"]
