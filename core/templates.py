"""Text templates with ``{slot}`` placeholders."""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import FrozenSet

from .assignment import Assignment

# ``{}`` is the literal empty value, not a slot.
SLOT_PATTERN = re.compile(r"\{([^{}\s]+)\}")


@dataclass(frozen=True)
class Template:
    """A piece of text that may contain named slots such as ``{user}``."""

    text: str

    def __post_init__(self) -> None:
        object.__setattr__(self, "text", self.text.strip())

    @property
    def slots(self) -> FrozenSet[str]:
        return frozenset(SLOT_PATTERN.findall(self.text))

    def get_slots(self) -> set[str]:
        return set(self.slots)

    def is_underspecified(self) -> bool:
        """True if the template still contains at least one slot."""

        return SLOT_PATTERN.search(self.text) is not None

    def fill_slots(self, assignment: Assignment) -> "Template":
        """Substitute every slot bound in ``assignment`` by the value's text.

        Slots missing from the assignment are left untouched, so the result may
        still be underspecified.
        """

        if not self.is_underspecified():
            return self

        def _replace(match: re.Match[str]) -> str:
            slot = match.group(1)
            if assignment.contains_var(slot):
                return str(assignment.get_value(slot))
            return match.group(0)

        return Template(SLOT_PATTERN.sub(_replace, self.text))

    def __str__(self) -> str:
        return self.text


__all__ = ["SLOT_PATTERN", "Template"]
