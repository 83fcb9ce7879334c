"""Terminal states of a supervision run and their process exit statuses."""

from __future__ import annotations

from enum import Enum

# A shell ``return -1`` surfaces as 255 in an 8-bit exit status, so 255 stands
# in for the negative zombie sentinel.
NATURAL_EXIT_CODE = 0
KILLED_EXIT_CODE = 1
ZOMBIED_EXIT_CODE = 255
CONFIGURATION_ERROR_EXIT_CODE = 2


class SupervisionOutcome(Enum):
    """How a supervised process ended up"""

    NATURAL_EXIT = "natural_exit"
    KILLED = "killed"
    ZOMBIED = "zombied"

    @property
    def exit_code(self) -> int:
        return _EXIT_CODES[self]

    @property
    def description(self) -> str:
        return _DESCRIPTIONS[self]


_EXIT_CODES = {
    SupervisionOutcome.NATURAL_EXIT: NATURAL_EXIT_CODE,
    SupervisionOutcome.KILLED: KILLED_EXIT_CODE,
    SupervisionOutcome.ZOMBIED: ZOMBIED_EXIT_CODE,
}

_DESCRIPTIONS = {
    SupervisionOutcome.NATURAL_EXIT: "Died a natural death.",
    SupervisionOutcome.KILLED: "KILLED!",
    SupervisionOutcome.ZOMBIED: "ZOMBIED!",
}


__all__ = [
    "CONFIGURATION_ERROR_EXIT_CODE",
    "KILLED_EXIT_CODE",
    "NATURAL_EXIT_CODE",
    "SupervisionOutcome",
    "ZOMBIED_EXIT_CODE",
]
