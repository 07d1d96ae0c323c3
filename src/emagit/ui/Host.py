# emagit/ui/Host.py
"""Host.py
========================
Capability interface between emagit's command layer and whatever user
interface hosts it.

Menus, choosers, prompts, status messages and the staged-changes preview
are all reached through a `BaseHost`. The command layer depends only on this
contract; `ConsoleHost` implements it for the terminal and tests supply a
scripted stub.
"""

import logging
from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING, Any, Callable, Optional


if TYPE_CHECKING:
    from emagit.core.Menu import Menu, MenuItem, QuickItem
    from emagit.core.Repository import MagitRepository
    from emagit.core.Switches import Switch

logger = logging.getLogger("emagit")


class PreviewKind(str, Enum):
    STAGED = "staged"


@dataclass(frozen=True)
class PreviewHandle:
    """Opaque handle to an opened preview; ``document`` identifies what it shows."""

    document: str
    kind: PreviewKind
    read_only: bool = True


@dataclass(frozen=True)
class PreviewBinding:
    """A place where a preview document is currently displayed."""

    document: str
    column: int


class StatusMessage:
    """A transient status-bar message that can be disposed once."""

    def __init__(
        self,
        text: str,
        timeout: Optional[float] = None,
        on_dispose: Optional[Callable[["StatusMessage"], None]] = None,
    ) -> None:
        self.text = text
        self.timeout = timeout
        self.disposed = False
        self._on_dispose = on_dispose

    def dispose(self) -> None:
        if self.disposed:
            return
        self.disposed = True
        if self._on_dispose:
            self._on_dispose(self)

    def __repr__(self) -> str:
        return f"StatusMessage({self.text!r}, timeout={self.timeout}, disposed={self.disposed})"


class BaseHost:
    """The UI capabilities emagit needs from its host.

    Suspending operations are coroutines. A dismissed menu, chooser or prompt
    resolves to None, which callers treat as a silent cancellation.
    """

    async def present_menu(
        self, menu: "Menu", switches: list["Switch"]
    ) -> Optional["MenuItem"]:
        """Shows a menu, lets the user toggle ``switches`` in place and pick an item."""
        raise NotImplementedError

    async def choose(
        self, items: list["QuickItem"], placeholder: str = ""
    ) -> Optional[Any]:
        """Lets the user pick one item; returns its ``meta``."""
        raise NotImplementedError

    async def prompt(self, message: str, initial: str = "") -> Optional[str]:
        """Asks for free text; ``initial`` is a suggestion only and empty input resolves to None."""
        raise NotImplementedError

    def set_status_message(
        self, text: str, timeout: Optional[float] = None
    ) -> StatusMessage:
        """Shows ``text`` for ``timeout`` seconds, or until disposed when None."""
        raise NotImplementedError

    async def open_preview(
        self, repository: "MagitRepository", kind: PreviewKind, read_only: bool = True
    ) -> PreviewHandle:
        raise NotImplementedError

    def locate_preview(self, handle: PreviewHandle) -> list[PreviewBinding]:
        """Currently visible bindings showing ``handle``'s document."""
        raise NotImplementedError

    async def focus_opposite(self, binding: PreviewBinding) -> int:
        """Moves focus to the binding's document in the column opposite the active one."""
        raise NotImplementedError

    async def close_preview(self, binding: PreviewBinding) -> None:
        raise NotImplementedError

    def focus_back(self, column: int) -> None:
        """Returns focus to the column the user was in before ``focus_opposite``."""
        raise NotImplementedError
