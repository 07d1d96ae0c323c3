# emagit/core/Switches.py
"""Switches.py
========================
Menu switches and their compilation into git command-line arguments.

A switch is declared by the menu function each time the menu is shown, the
user toggles it by its short form, and the enabled ones are compiled into
argument tokens in declaration order.
"""

from dataclasses import dataclass
from typing import Iterable, Optional


@dataclass
class Switch:
    """A toggleable git option shown in a menu."""

    short_name: str
    long_name: Optional[str]
    description: str
    enabled: bool = False

    @property
    def token(self) -> str:
        """The argument emitted for this switch; short-only switches emit their short form."""
        return self.long_name or self.short_name

    def toggle(self) -> None:
        self.enabled = not self.enabled


def switches_to_args(switches: Iterable[Switch]) -> list[str]:
    """Compiles switches into argument tokens, one per enabled switch, in order."""
    return [switch.token for switch in switches if switch.enabled]


def find_switch(switches: Iterable[Switch], short_name: str) -> Optional[Switch]:
    """Returns the switch declared with ``short_name``, if any."""
    return next((s for s in switches if s.short_name == short_name), None)
