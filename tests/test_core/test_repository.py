# tests/test_core/test_repository.py
"""Unit tests for the repository model and its parsing of git output."""

from unittest.mock import AsyncMock, patch

import pytest

from emagit.core.Repository import (
    MagitRepository,
    Ref,
    RefType,
    Remote,
    RemoteBranch,
    parse_refs,
    parse_remotes,
    push_remote_from_config,
    upstream_from_config,
)


CONFIG = {
    "core.bare": "false",
    "remote.origin.url": "https://example.com/o.git",
    "remote.origin.fetch": "+refs/heads/*:refs/remotes/origin/*",
    "remote.fork.url": "https://example.com/f.git",
    "remote.fork.pushurl": "git@example.com:f.git",
    "branch.main.remote": "origin",
    "branch.main.merge": "refs/heads/main",
    "branch.main.pushremote": "fork",
    "branch.topic.remote": "origin",
}


def test_parse_remotes_keeps_order_and_defaults_push_url() -> None:
    assert parse_remotes(CONFIG) == [
        Remote("origin", "https://example.com/o.git", "https://example.com/o.git"),
        Remote("fork", "https://example.com/f.git", "git@example.com:f.git"),
    ]


def test_parse_refs_types_and_remotes() -> None:
    raw = [
        ("refs/heads/main", "a1"),
        ("refs/remotes/origin/HEAD", "a1"),
        ("refs/remotes/origin/main", "a1"),
        ("refs/remotes/team/ops/deploy", "b2"),
        ("refs/tags/v1.0.0", "c3"),
    ]
    remotes = [Remote("origin"), Remote("team"), Remote("team/ops")]

    assert parse_refs(raw, remotes) == [
        Ref("main", RefType.HEAD, commit="a1"),
        Ref("origin/main", RefType.REMOTE_HEAD, remote="origin", commit="a1"),
        Ref("team/ops/deploy", RefType.REMOTE_HEAD, remote="team/ops", commit="b2"),
        Ref("v1.0.0", RefType.TAG, commit="c3"),
    ]


def test_upstream_from_config() -> None:
    assert upstream_from_config(CONFIG, "main") == RemoteBranch("main", "origin")
    # A remote without a merge ref is not an upstream.
    assert upstream_from_config(CONFIG, "topic") is None
    assert upstream_from_config(CONFIG, None) is None


def test_push_remote_falls_back_to_push_default() -> None:
    assert push_remote_from_config(CONFIG, "main") == RemoteBranch("main", "fork")
    assert push_remote_from_config(CONFIG, "topic") is None

    config = {**CONFIG, "remote.pushdefault": "origin"}
    assert push_remote_from_config(config, "topic") == RemoteBranch("topic", "origin")


def test_remote_branch_str() -> None:
    assert str(RemoteBranch("feature/x", "origin")) == "origin/feature/x"


@pytest.mark.asyncio
async def test_set_config_writes_local_config(repository) -> None:
    git_run = AsyncMock()
    with patch("emagit.core.Repository.git_run", git_run):
        await repository.set_config("branch.main.pushRemote", "origin")

    git_run.assert_awaited_once_with(
        repository, ["config", "--local", "branch.main.pushRemote", "origin"]
    )


@pytest.mark.asyncio
async def test_load_reads_state_from_git(tmp_path) -> None:
    raw_refs = [("refs/heads/main", "abc"), ("refs/tags/v1", "def")]
    with patch(
        "emagit.core.Repository.read_config", AsyncMock(return_value=CONFIG)
    ), patch(
        "emagit.core.Repository.list_refs", AsyncMock(return_value=raw_refs)
    ), patch(
        "emagit.core.Repository.current_branch", AsyncMock(return_value="main")
    ), patch(
        "emagit.core.Repository.head_commit", AsyncMock(return_value="abc")
    ):
        repository = await MagitRepository.load(tmp_path)

    assert repository.root == tmp_path
    assert [r.name for r in repository.remotes] == ["origin", "fork"]
    assert [r.name for r in repository.refs_of_type(RefType.TAG)] == ["v1"]
    assert repository.head.name == "main"
    assert repository.head.commit == "abc"
    assert repository.head.upstream == RemoteBranch("main", "origin")
    assert repository.head.push_remote == RemoteBranch("main", "fork")


@pytest.mark.asyncio
async def test_detached_head_has_no_tracking(tmp_path) -> None:
    with patch(
        "emagit.core.Repository.read_config", AsyncMock(return_value=CONFIG)
    ), patch("emagit.core.Repository.list_refs", AsyncMock(return_value=[])), patch(
        "emagit.core.Repository.current_branch", AsyncMock(return_value=None)
    ), patch(
        "emagit.core.Repository.head_commit", AsyncMock(return_value="abc")
    ):
        repository = await MagitRepository.load(tmp_path)

    assert repository.head.name is None
    assert repository.head.upstream is None
    assert repository.head.push_remote is None
