# emagit/commands/PushingCommands.py
"""The Pushing menu and its actions.

``p`` and ``u`` either push directly or, when HEAD has no push-remote or
upstream yet, ask for one, persist it with ``git config``, update the
in-memory HEAD state and then push (configure-then-retry).
"""

import asyncio
import logging
from typing import TYPE_CHECKING, Any, Optional

from emagit.core.Menu import Menu, MenuItem, MenuState, show_menu
from emagit.core.RefResolver import (
    choose_remote,
    choose_tag,
    choose_upstream,
    remote_branch_full_name_to_segments,
)
from emagit.core.Repository import RemoteBranch
from emagit.core.Switches import Switch, switches_to_args
from emagit.integrations.GitBridge import git_run


if TYPE_CHECKING:
    from emagit.core.Repository import MagitRepository
    from emagit.ui.Host import BaseHost

logger = logging.getLogger("emagit")


def pushing_switches() -> list[Switch]:
    return [
        Switch("-f", "--force-with-lease", "Force with lease"),
        Switch("-F", "--force", "Force"),
        Switch("-h", "--no-verify", "Disable hooks"),
        Switch("-d", "--dry-run", "Dry run"),
    ]


def generate_pushing_menu(repository: "MagitRepository") -> Menu:
    items: list[MenuItem] = []
    head = repository.head

    if head and head.push_remote:
        items.append(MenuItem("p", str(head.push_remote), push_to_push_remote))
    else:
        items.append(MenuItem("p", "pushRemote, after setting that", push_set_push_remote))

    if head and head.upstream:
        items.append(MenuItem("u", str(head.upstream), push_upstream))
    else:
        items.append(MenuItem("u", "@{upstream}, after setting that", push_set_upstream))

    items.append(MenuItem("e", "elsewhere", push_elsewhere))
    items.append(MenuItem("T", "a tag", push_tag))
    items.append(MenuItem("t", "all tags", push_all_tags))

    return Menu("Pushing", items)


async def pushing(
    repository: "MagitRepository", host: "BaseHost", config: dict[str, Any]
) -> Any:
    state = MenuState(repository, pushing_switches(), host, config)
    return await show_menu(generate_pushing_menu(repository), state)


def _tag_remote(repository: "MagitRepository") -> Optional[str]:
    """Upstream remote, falling back to the push remote."""
    head = repository.head
    if not head:
        return None
    if head.upstream:
        return head.upstream.remote
    if head.push_remote:
        return head.push_remote.remote
    return None


async def push_to_push_remote(state: MenuState) -> Any:
    head = state.repository.head
    if not (head and head.name and head.push_remote):
        logger.debug("push_to_push_remote: no push-remote or branch")
        return None
    args = ["push", *switches_to_args(state.switches), head.push_remote.remote, head.name]
    return await git_run(state.repository, args)


async def push_set_push_remote(state: MenuState) -> Any:
    repository = state.repository
    chosen_remote = await choose_remote(repository, state.host, "Set pushRemote")
    ref = repository.head.name if repository.head else None

    if not (chosen_remote and ref):
        return None

    await repository.set_config(f"branch.{ref}.pushRemote", chosen_remote)
    repository.head.push_remote = RemoteBranch(name=ref, remote=chosen_remote)
    return await push_to_push_remote(state)


async def push_upstream(state: MenuState) -> Any:
    head = state.repository.head
    if not (head and head.name and head.upstream):
        logger.debug("push_upstream: no upstream or branch")
        return None
    args = ["push", *switches_to_args(state.switches), head.upstream.remote, head.name]
    return await git_run(state.repository, args)


async def push_set_upstream(state: MenuState) -> Any:
    repository = state.repository
    chosen = await choose_upstream(repository, state.host)
    ref = repository.head.name if repository.head else None

    if not (chosen and ref):
        return None

    remote, name = remote_branch_full_name_to_segments(chosen)
    if not (remote and name):
        logger.debug(f"push_set_upstream: '{chosen}' is not a remote branch")
        return None

    # Both keys describe one upstream; write them together.
    await asyncio.gather(
        repository.set_config(f"branch.{ref}.merge", f"refs/heads/{name}"),
        repository.set_config(f"branch.{ref}.remote", remote),
    )
    repository.head.upstream = RemoteBranch(name=name, remote=remote)
    return await push_upstream(state)


async def push_elsewhere(state: MenuState) -> Any:
    destination = await state.host.prompt("Push to remote or url")
    if not destination:
        return None
    head_name = state.repository.head.name if state.repository.head else None
    ref = await state.host.prompt("Push ref", initial=head_name or "")
    if not ref:
        return None
    args = ["push", *switches_to_args(state.switches), destination, ref]
    return await git_run(state.repository, args)


async def push_tag(state: MenuState) -> Any:
    remote = _tag_remote(state.repository)
    if not remote:
        logger.debug("push_tag: neither upstream nor push-remote configured")
        return None
    tag = await choose_tag(state.repository, state.host, "Push tag")
    if not tag:
        return None
    args = ["push", *switches_to_args(state.switches), remote, tag]
    return await git_run(state.repository, args)


async def push_all_tags(state: MenuState) -> Any:
    remote = _tag_remote(state.repository)
    if not remote:
        logger.debug("push_all_tags: neither upstream nor push-remote configured")
        return None
    args = ["push", *switches_to_args(state.switches), remote, "--tags"]
    return await git_run(state.repository, args)
