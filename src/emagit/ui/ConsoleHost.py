# emagit/ui/ConsoleHost.py
"""ConsoleHost.py
========================
Terminal implementation of `BaseHost` built on rich.

Menus are printed as tables of single-character actions plus their switches;
the user types a label to run an action or a switch's short form (``-p``) to
toggle it. Choosers are numbered tables, prompts are plain line input, and
status messages are dimmed lines. Reading the terminal blocks, so input runs
in the event loop's default executor and other tasks keep going meanwhile.
"""

import asyncio
import logging
from typing import TYPE_CHECKING, Any, Callable, Optional

from rich.console import Console
from rich.panel import Panel
from rich.prompt import Prompt
from rich.syntax import Syntax
from rich.table import Table

from emagit.core.Switches import find_switch
from emagit.ui.Host import (
    BaseHost,
    PreviewBinding,
    PreviewHandle,
    PreviewKind,
    StatusMessage,
)
from emagit.ui.PreviewManager import MAIN_COLUMN, SIDE_COLUMN, PreviewManager


if TYPE_CHECKING:
    from emagit.core.Menu import Menu, MenuItem, QuickItem
    from emagit.core.Repository import MagitRepository
    from emagit.core.Switches import Switch

logger = logging.getLogger("emagit")

DISMISS_ANSWERS = {"", "q"}


class ConsoleHost(BaseHost):
    """Hosts emagit's menus and commit workflow in a plain terminal."""

    def __init__(self, config: dict[str, Any], console: Optional[Console] = None) -> None:
        self.config = config
        self.console = console or Console()
        self.previews = PreviewManager()
        self.active_status: list[StatusMessage] = []

    # ---- input ----
    async def _ask(self, question: str) -> Optional[str]:
        """Reads one answer without blocking the event loop; None on EOF or Ctrl-C.

        No default is passed to rich, so empty input stays empty.
        """
        loop = asyncio.get_running_loop()
        ask: Callable[[], str] = lambda: Prompt.ask(question, console=self.console)
        try:
            answer = await loop.run_in_executor(None, ask)
        except (EOFError, KeyboardInterrupt):
            self.console.print()
            return None
        return (answer or "").strip()

    # ---- menus ----
    def _render_menu(self, menu: "Menu", switches: list["Switch"]) -> None:
        if switches:
            switch_table = Table(title="Switches", show_header=False, box=None)
            for switch in switches:
                state = "[bold green]on[/]" if switch.enabled else "[dim]off[/]"
                switch_table.add_row(
                    f"[bold]{switch.short_name}[/]",
                    switch.description,
                    f"({switch.token})",
                    state,
                )
            self.console.print(switch_table)

        action_table = Table(title=menu.title, show_header=False, box=None)
        for item in menu.commands:
            action_table.add_row(f"[bold magenta]{item.label}[/]", item.description)
        self.console.print(action_table)

    async def present_menu(
        self, menu: "Menu", switches: list["Switch"]
    ) -> Optional["MenuItem"]:
        self._render_menu(menu, switches)
        while True:
            answer = await self._ask(f"{menu.title} (q to quit)")
            if answer is None or answer in DISMISS_ANSWERS:
                return None

            switch = find_switch(switches, answer)
            if switch is not None:
                switch.toggle()
                self._render_menu(menu, switches)
                continue

            item = menu.get(answer)
            if item is not None:
                return item
            self.console.print(f"[red]No action or switch '{answer}'[/]")

    # ---- choosers and prompts ----
    async def choose(
        self, items: list["QuickItem"], placeholder: str = ""
    ) -> Optional[Any]:
        if not items:
            return None

        table = Table(title=placeholder or None, show_header=False, box=None)
        for idx, item in enumerate(items, 1):
            table.add_row(f"[dim]{idx}[/]", f"[bold]{item.label}[/]", item.description)
        self.console.print(table)

        while True:
            answer = await self._ask(placeholder or "Choose")
            if not answer:
                return None
            if answer.isdigit() and 1 <= int(answer) <= len(items):
                return items[int(answer) - 1].meta
            match = next((item for item in items if item.label == answer), None)
            if match is not None:
                return match.meta
            self.console.print(f"[red]'{answer}' is not one of the choices[/]")

    async def prompt(self, message: str, initial: str = "") -> Optional[str]:
        """Empty input cancels; ``initial`` is shown as a hint, never used as a default."""
        question = f"{message} [dim](e.g. {initial})[/]" if initial else message
        answer = await self._ask(question)
        return answer or None

    # ---- status messages ----
    def set_status_message(
        self, text: str, timeout: Optional[float] = None
    ) -> StatusMessage:
        message = StatusMessage(text, timeout, on_dispose=self._status_disposed)
        self.active_status.append(message)
        self.console.print(f"[dim]»[/] {text}")
        logger.debug(f"Status message: {text}")

        if timeout is not None:
            try:
                asyncio.get_running_loop().call_later(timeout, message.dispose)
            except RuntimeError:
                # No loop: nothing can expire it later, and the line is printed already.
                message.dispose()
        return message

    def _status_disposed(self, message: StatusMessage) -> None:
        if message in self.active_status:
            self.active_status.remove(message)

    # ---- preview ----
    async def open_preview(
        self, repository: "MagitRepository", kind: PreviewKind, read_only: bool = True
    ) -> PreviewHandle:
        handle = await self.previews.open(repository, kind, read_only)
        text = self.previews.content(handle.document) or ""
        body = Syntax(text, "diff") if text.strip() else "[dim](no staged changes)[/]"
        title = "Staged changes" + (" (read-only)" if read_only else "")
        self.console.print(Panel(body, title=title))
        return handle

    def locate_preview(self, handle: PreviewHandle) -> list[PreviewBinding]:
        return self.previews.locate(handle)

    async def focus_opposite(self, binding: PreviewBinding) -> int:
        column = self.previews.opposite_column()
        self.previews.focus(column)
        return column

    async def close_preview(self, binding: PreviewBinding) -> None:
        if self.previews.close(binding):
            self.console.print("[dim]Closed staged changes preview[/]")

    def focus_back(self, column: int) -> None:
        self.previews.focus(MAIN_COLUMN if column == SIDE_COLUMN else SIDE_COLUMN)
