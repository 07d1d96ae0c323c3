# tests/test_commands/test_committing.py
"""Tests for the Committing menu."""

from unittest.mock import AsyncMock, patch

import pytest

from emagit.commands.CommitCommands import committing, generate_commit_menu
from emagit.core.CommitOrchestrator import CommitEditorOptions
from emagit.errors import NoTargetChosenError

from tests.stubs import StubHost, completed


RUN_COMMIT = "emagit.commands.CommitCommands.run_commit_like_command"


def test_menu_labels() -> None:
    assert generate_commit_menu().labels == ["c", "a", "e", "w", "f"]


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "label, expected_args",
    [
        ("c", ["commit"]),
        ("a", ["commit", "--amend"]),
        ("e", ["commit", "--amend", "--no-edit"]),
        ("w", ["commit", "--amend", "--only"]),
    ],
)
async def test_commit_family_goes_through_orchestrator(
    repository, label, expected_args
) -> None:
    run_commit = AsyncMock()
    host = StubHost(menu_choice=label)

    with patch(RUN_COMMIT, run_commit):
        await committing(repository, host, {})

    run_commit.assert_awaited_once()
    called_repository, args, called_host, options = run_commit.await_args.args
    assert called_repository is repository
    assert args == expected_args
    assert called_host is host
    assert isinstance(options, CommitEditorOptions)


@pytest.mark.asyncio
async def test_switches_precede_commit_arguments(repository) -> None:
    run_commit = AsyncMock()
    config = {"commit": {"show_staged_changes": False}}

    with patch(RUN_COMMIT, run_commit):
        await committing(repository, StubHost(menu_choice="a", toggles=["-a"]), config)

    _, args, _, options = run_commit.await_args.args
    assert args == ["commit", "--all", "--amend"]
    assert options.show_staged_changes is False


@pytest.mark.asyncio
async def test_fixup_commits_against_chosen_sha(repository) -> None:
    git_run = AsyncMock(return_value=completed())
    host = StubHost(menu_choice="f", choices=["0123456789abcdef"])

    with patch(
        "emagit.core.RefResolver.recent_commits",
        AsyncMock(return_value=[("0123456789abcdef", "Add feature")]),
    ), patch("emagit.commands.CommitCommands.git_run", git_run):
        await committing(repository, host, {})

    git_run.assert_awaited_once_with(
        repository, ["commit", "--fixup", "0123456789abcdef"]
    )


@pytest.mark.asyncio
async def test_fixup_without_choice_raises(repository) -> None:
    git_run = AsyncMock()

    with patch(
        "emagit.core.RefResolver.recent_commits",
        AsyncMock(return_value=[("0123456789abcdef", "Add feature")]),
    ), patch("emagit.commands.CommitCommands.git_run", git_run):
        with pytest.raises(NoTargetChosenError) as excinfo:
            await committing(repository, StubHost(menu_choice="f"), {})

    assert excinfo.value.what == "fixup"
    git_run.assert_not_called()
