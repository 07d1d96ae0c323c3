# emagit/core/Menu.py
"""Menu.py
========================
The menu engine: labeled actions, the state bound to them, and the
single-shot ``show_menu`` that presents a menu through the host and invokes
the chosen action.

Each operation family builds its `Menu` from current repository state and
declares its switches afresh for every presentation. The engine itself keeps
no state between invocations.
"""

import inspect
import logging
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, Callable, Optional

from emagit.core.Switches import Switch


if TYPE_CHECKING:
    from emagit.core.Repository import MagitRepository
    from emagit.ui.Host import BaseHost

logger = logging.getLogger("emagit")


@dataclass
class MenuState:
    """Context handed to the chosen action. ``repository`` is shared, not owned."""

    repository: "MagitRepository"
    switches: list[Switch]
    host: "BaseHost"
    config: dict[str, Any] = field(default_factory=dict)


Action = Callable[[MenuState], Any]


@dataclass
class MenuItem:
    label: str
    description: str
    action: Action


@dataclass
class Menu:
    title: str
    commands: list[MenuItem]

    def __post_init__(self) -> None:
        labels = [item.label for item in self.commands]
        duplicates = {label for label in labels if labels.count(label) > 1}
        if duplicates:
            raise ValueError(
                f"Menu '{self.title}' has duplicate labels: {sorted(duplicates)}"
            )

    @property
    def labels(self) -> list[str]:
        return [item.label for item in self.commands]

    def get(self, label: str) -> Optional[MenuItem]:
        return next((item for item in self.commands if item.label == label), None)


@dataclass
class QuickItem:
    """A chooser entry; ``meta`` is what the chooser resolves to."""

    label: str
    description: str
    meta: Any


async def show_menu(menu: Menu, state: MenuState) -> Any:
    """Presents ``menu`` and runs the chosen action; returns None when dismissed."""
    logger.debug("Showing menu '%s' with labels %s", menu.title, menu.labels)
    chosen = await state.host.present_menu(menu, state.switches)
    if chosen is None:
        logger.debug("Menu '%s' dismissed", menu.title)
        return None

    logger.info(f"Menu '{menu.title}': running '{chosen.label}' ({chosen.description})")
    result = chosen.action(state)
    if inspect.isawaitable(result):
        result = await result
    return result
