# emagit/commands/DispatchCommands.py
"""Top-level dispatch menu leading to the operation menus."""

from typing import TYPE_CHECKING, Any

from emagit.commands.CommitCommands import committing
from emagit.commands.FetchingCommands import fetching
from emagit.commands.PushingCommands import pushing
from emagit.core.Menu import Menu, MenuItem, MenuState, show_menu


if TYPE_CHECKING:
    from emagit.core.Repository import MagitRepository
    from emagit.ui.Host import BaseHost


def generate_dispatch_menu() -> Menu:
    return Menu(
        "Dispatch",
        [
            MenuItem("f", "Fetching", lambda s: fetching(s.repository, s.host, s.config)),
            MenuItem("P", "Pushing", lambda s: pushing(s.repository, s.host, s.config)),
            MenuItem("c", "Committing", lambda s: committing(s.repository, s.host, s.config)),
        ],
    )


async def dispatch(
    repository: "MagitRepository", host: "BaseHost", config: dict[str, Any]
) -> Any:
    state = MenuState(repository, [], host, config)
    return await show_menu(generate_dispatch_menu(), state)


MENUS = {
    "dispatch": dispatch,
    "fetch": fetching,
    "push": pushing,
    "commit": committing,
}
