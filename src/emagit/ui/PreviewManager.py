# emagit/ui/PreviewManager.py
"""PreviewManager.py
========================
This module defines the PreviewManager class, which tracks the read-only
preview documents (such as the staged diff shown while a commit message is
being written) that the console host has on screen, which column each one
occupies, and which column has focus. Previews are opened by kind through a
registry of renderers and closed through the bindings the manager hands out.
"""

import itertools
import logging
from typing import TYPE_CHECKING, Awaitable, Callable, Optional

from emagit.integrations.GitBridge import staged_diff
from emagit.ui.Host import PreviewBinding, PreviewHandle, PreviewKind


if TYPE_CHECKING:
    from emagit.core.Repository import MagitRepository

# A renderer returns the text of the document for a repository.
Renderer = Callable[["MagitRepository"], Awaitable[str]]

MAIN_COLUMN = 1
SIDE_COLUMN = 2


## ================= PreviewManager Class ===============================
class PreviewManager:
    """Manages the lifecycle of preview documents shown beside the main view.

    Attributes:
        registered_previews (dict[PreviewKind, Renderer]): How each kind of
            preview produces its text.
        visible (list[PreviewBinding]): Previews currently on screen.
        contents (dict[str, str]): Rendered text per document.
        active_column (int): Column that currently has focus.
    """

    def __init__(self) -> None:
        self.registered_previews: dict[PreviewKind, Renderer] = {
            PreviewKind.STAGED: staged_diff,
        }
        self.visible: list[PreviewBinding] = []
        self.contents: dict[str, str] = {}
        self.active_column = MAIN_COLUMN
        self._serial = itertools.count(1)
        logging.info(
            "PreviewManager initialised with: %s",
            [kind.value for kind in self.registered_previews],
        )

    def document_for(self, repository: "MagitRepository", kind: PreviewKind) -> str:
        """Document name for one `open` call; no two calls share a name."""
        return f"emagit://{repository.root}/{kind.value}#{next(self._serial)}"

    def opposite_column(self) -> int:
        return SIDE_COLUMN if self.active_column == MAIN_COLUMN else MAIN_COLUMN

    async def open(
        self, repository: "MagitRepository", kind: PreviewKind, read_only: bool = True
    ) -> PreviewHandle:
        """Renders a preview of ``kind`` and shows it in the column beside the active one."""
        renderer = self.registered_previews.get(kind)
        if renderer is None:
            raise ValueError(f"Unknown preview kind '{kind}'")

        document = self.document_for(repository, kind)
        self.contents[document] = await renderer(repository)

        self.visible.append(PreviewBinding(document, self.opposite_column()))
        logging.info(f"Preview '{document}' shown (read_only={read_only}).")
        return PreviewHandle(document, kind, read_only)

    def locate(self, handle: PreviewHandle) -> list[PreviewBinding]:
        return [b for b in self.visible if b.document == handle.document]

    def focus(self, column: int) -> None:
        self.active_column = column

    def close(self, binding: PreviewBinding) -> bool:
        """Closes ``binding``; returns False when it was not on screen."""
        if binding not in self.visible:
            logging.debug("Preview %s already closed", binding.document)
            return False
        self.visible.remove(binding)
        self.contents.pop(binding.document, None)
        logging.info("Preview closed: %s", binding.document)
        return True

    def content(self, document: str) -> Optional[str]:
        return self.contents.get(document)
