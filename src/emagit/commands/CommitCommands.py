# emagit/commands/CommitCommands.py
"""The Committing menu.

Commit, amend, extend and reword go through the commit orchestrator so the
message is written in emagit's editor next to the staged changes. Fixup
needs no message and runs git directly.
"""

from typing import TYPE_CHECKING, Any, Optional

from emagit.core.CommitOrchestrator import CommitEditorOptions, run_commit_like_command
from emagit.core.Menu import Menu, MenuItem, MenuState, show_menu
from emagit.core.RefResolver import choose_commit
from emagit.core.Switches import Switch, switches_to_args
from emagit.errors import NoTargetChosenError
from emagit.integrations.GitBridge import git_run


if TYPE_CHECKING:
    from emagit.core.Repository import MagitRepository
    from emagit.ui.Host import BaseHost


def commit_switches() -> list[Switch]:
    return [
        Switch("-a", "--all", "Stage all modified and deleted files"),
        Switch("-e", "--allow-empty", "Allow empty commit"),
    ]


def generate_commit_menu() -> Menu:
    return Menu(
        "Committing",
        [
            MenuItem("c", "Commit", commit),
            MenuItem("a", "Amend", lambda state: commit(state, ["--amend"])),
            MenuItem("e", "Extend", lambda state: commit(state, ["--amend", "--no-edit"])),
            MenuItem("w", "Reword", lambda state: commit(state, ["--amend", "--only"])),
            MenuItem("f", "Fixup", fixup),
        ],
    )


async def committing(
    repository: "MagitRepository", host: "BaseHost", config: dict[str, Any]
) -> Any:
    state = MenuState(repository, commit_switches(), host, config)
    return await show_menu(generate_commit_menu(), state)


async def commit(state: MenuState, commit_args: Optional[list[str]] = None) -> None:
    args = ["commit", *switches_to_args(state.switches), *(commit_args or [])]
    options = CommitEditorOptions.from_config(state.config)
    return await run_commit_like_command(state.repository, args, state.host, options)


async def fixup(state: MenuState) -> Any:
    sha = await choose_commit(state.repository, state.host, "Fixup commit")
    if not sha:
        raise NoTargetChosenError("No commit chosen to fixup", what="fixup")
    args = ["commit", *switches_to_args(state.switches), "--fixup", sha]
    return await git_run(state.repository, args)
