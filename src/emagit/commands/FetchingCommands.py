# emagit/commands/FetchingCommands.py
"""The Fetching menu and its actions."""

import logging
from typing import TYPE_CHECKING, Any

from emagit.core.Menu import Menu, MenuItem, MenuState, show_menu
from emagit.core.RefResolver import choose_remote
from emagit.core.Switches import Switch, switches_to_args
from emagit.integrations.GitBridge import git_run


if TYPE_CHECKING:
    from emagit.core.Repository import MagitRepository
    from emagit.ui.Host import BaseHost

logger = logging.getLogger("emagit")


def fetching_switches() -> list[Switch]:
    return [Switch("-p", "--prune", "Prune deleted branches")]


def generate_fetching_menu(repository: "MagitRepository") -> Menu:
    """Offers ``p``/``u`` only when HEAD has a push-remote/upstream configured."""
    items: list[MenuItem] = []
    head = repository.head

    if head and head.push_remote:
        items.append(MenuItem("p", head.push_remote.remote, fetch_from_push_remote))

    if head and head.upstream:
        items.append(MenuItem("u", head.upstream.remote, fetch_from_upstream))

    items.append(MenuItem("e", "elsewhere", fetch_from_elsewhere))
    items.append(MenuItem("a", "all remotes", fetch_all))
    items.append(MenuItem("o", "another branch", fetch_another_branch))

    return Menu("Fetching", items)


async def fetching(
    repository: "MagitRepository", host: "BaseHost", config: dict[str, Any]
) -> Any:
    state = MenuState(repository, fetching_switches(), host, config)
    return await show_menu(generate_fetching_menu(repository), state)


async def fetch_from_push_remote(state: MenuState) -> Any:
    head = state.repository.head
    if not (head and head.push_remote):
        logger.debug("fetch_from_push_remote: no push-remote configured")
        return None
    args = ["fetch", *switches_to_args(state.switches), head.push_remote.remote]
    return await git_run(state.repository, args)


async def fetch_from_upstream(state: MenuState) -> Any:
    head = state.repository.head
    if not (head and head.upstream):
        logger.debug("fetch_from_upstream: no upstream configured")
        return None
    args = ["fetch", *switches_to_args(state.switches), head.upstream.remote]
    return await git_run(state.repository, args)


async def fetch_from_elsewhere(state: MenuState) -> Any:
    remote = await choose_remote(state.repository, state.host, "Fetch from")
    if not remote:
        return None
    args = ["fetch", *switches_to_args(state.switches), remote]
    return await git_run(state.repository, args)


async def fetch_all(state: MenuState) -> Any:
    args = ["fetch", *switches_to_args(state.switches), "--all"]
    return await git_run(state.repository, args)


async def fetch_another_branch(state: MenuState) -> Any:
    remote = await state.host.prompt("Fetch from remote or url")
    if not remote:
        return None
    branch = await state.host.prompt("Fetch branch")
    if not branch:
        return None
    args = [
        "fetch",
        *switches_to_args(state.switches),
        remote,
        f"refs/heads/{branch}",
    ]
    return await git_run(state.repository, args)
