# emagit/core/CommitOrchestrator.py
"""CommitOrchestrator Module
==================
Runs commit-family git commands whose message is composed in emagit's own
editor, while a read-only preview of the staged changes is shown next to it.

Flow of one invocation:

1. An instruction status message is shown; it stays until finalization.
2. The staged-changes preview is opened and git is started *concurrently*.
   git's editor variable points at ``emagit edit --wait`` so the message is
   typed inside emagit.
3. Optionally, after a short delay, the repository state is refreshed
   (best effort).
4. When git settles, the instruction is disposed and either
   ``Git finished: ...`` or ``Commit canceled.`` is shown.
5. The preview task is awaited and its surface closed, whatever happened
   above. Failures are re-raised only when ``propagate_errors`` is set.

Cancelling the message (``:cancel`` in the editor) makes git exit non-zero,
so it is reported the same way as any other git failure.
"""

import asyncio
import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Optional

from emagit.core.RefResolver import collapse_lines
from emagit.integrations.GitBridge import (
    DEFAULT_EDITOR_ENV_VAR,
    editor_command,
    git_run,
)
from emagit.ui.Host import PreviewHandle, PreviewKind


if TYPE_CHECKING:
    from emagit.core.Repository import MagitRepository
    from emagit.ui.Host import BaseHost

logger = logging.getLogger("emagit")

INSTRUCTION_MESSAGE = "Type :confirm to finish, or :cancel to abort"
CANCELED_MESSAGE = "Commit canceled."
DEFAULT_STATUS_TIMEOUT = 10.0
DEFAULT_POST_COMMIT_DELAY = 0.1

_refresh_tasks: set[asyncio.Future] = set()


@dataclass
class CommitEditorOptions:
    show_staged_changes: bool = True
    update_post_commit_task: bool = False
    editor_env_var: Optional[str] = None
    editor_command: Optional[str] = None
    propagate_errors: bool = False
    post_commit_delay: float = DEFAULT_POST_COMMIT_DELAY
    status_timeout: float = DEFAULT_STATUS_TIMEOUT

    @classmethod
    def from_config(cls, config: dict[str, Any], **overrides: Any) -> "CommitEditorOptions":
        """Builds options from the ``[commit]``, ``[git]`` and ``[status]`` config sections."""
        commit_cfg = config.get("commit", {})
        git_cfg = config.get("git", {})
        status_cfg = config.get("status", {})
        options = cls(
            show_staged_changes=commit_cfg.get("show_staged_changes", True),
            update_post_commit_task=commit_cfg.get("update_post_commit_task", False),
            editor_env_var=git_cfg.get("editor_env_var") or None,
            editor_command=git_cfg.get("editor_command") or None,
            propagate_errors=commit_cfg.get("propagate_errors", False),
            post_commit_delay=float(
                commit_cfg.get("post_commit_delay", DEFAULT_POST_COMMIT_DELAY)
            ),
            status_timeout=float(
                status_cfg.get("display_timeout", DEFAULT_STATUS_TIMEOUT)
            ),
        )
        for key, value in overrides.items():
            setattr(options, key, value)
        return options


async def run_commit_like_command(
    repository: "MagitRepository",
    args: list[str],
    host: "BaseHost",
    options: Optional[CommitEditorOptions] = None,
) -> None:
    """Runs ``git <args>`` with emagit as the message editor. See the module docstring."""
    if options is None:
        options = CommitEditorOptions()

    staged_preview_task: Optional[asyncio.Future] = None
    instruction_status = None
    try:
        instruction_status = host.set_status_message(INSTRUCTION_MESSAGE)

        if options.show_staged_changes:
            staged_preview_task = asyncio.ensure_future(
                host.open_preview(repository, PreviewKind.STAGED, True)
            )

        env = {
            options.editor_env_var
            or DEFAULT_EDITOR_ENV_VAR: options.editor_command
            or editor_command()
        }
        logger.info(f"Running git {' '.join(args)} with {list(env)} override")
        commit_task = asyncio.ensure_future(git_run(repository, args, env=env))

        if options.update_post_commit_task:
            await asyncio.sleep(options.post_commit_delay)
            _schedule_refresh(repository)

        result = await commit_task

        instruction_status.dispose()
        host.set_status_message(
            f"Git finished: {collapse_lines(result.stdout)}", options.status_timeout
        )

    except Exception as e:
        logger.info(f"Commit-like command git {' '.join(args)} did not finish: {e}")
        if instruction_status:
            instruction_status.dispose()
        host.set_status_message(CANCELED_MESSAGE, options.status_timeout)
        if options.propagate_errors:
            raise

    finally:
        await _close_staged_preview(staged_preview_task, host)


def _schedule_refresh(repository: "MagitRepository") -> asyncio.Future:
    """Starts a repository refresh whose failure is only logged."""

    def _done(task: asyncio.Future) -> None:
        _refresh_tasks.discard(task)
        if task.cancelled():
            return
        exc = task.exception()
        if exc is not None:
            logger.debug(f"Post-commit refresh failed, ignoring: {exc}")

    task = asyncio.ensure_future(repository.refresh())
    # The loop keeps only weak references to tasks.
    _refresh_tasks.add(task)
    task.add_done_callback(_done)
    return task


async def _close_staged_preview(
    staged_preview_task: Optional[asyncio.Future], host: "BaseHost"
) -> None:
    if staged_preview_task is None:
        return

    try:
        handle: Optional[PreviewHandle] = await staged_preview_task
    except Exception as e:
        # Nothing was opened, so there is nothing to close.
        logger.warning(f"Staged changes preview could not be opened: {e}")
        return

    if handle is None:
        return

    try:
        for binding in host.locate_preview(handle):
            column = await host.focus_opposite(binding)
            await host.close_preview(binding)
            host.focus_back(column)
    except Exception as e:
        logger.warning(f"Staged changes preview could not be closed: {e}", exc_info=True)
