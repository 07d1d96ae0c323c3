# tests/conftest.py
"""Pytest configuration with shared fixtures for the emagit tests."""

from __future__ import annotations

from pathlib import Path
from typing import Callable, Optional

import pytest

from emagit.core.Repository import (
    HeadState,
    MagitRepository,
    Ref,
    RefType,
    Remote,
    RemoteBranch,
)

from tests.stubs import StubHost


@pytest.fixture
def make_repository(tmp_path: Path) -> Callable[..., MagitRepository]:
    """Factory for an in-memory repository on branch ``main`` with one remote.

    Keyword arguments override the HEAD tracking state and the ref set.
    """

    def factory(
        head_name: Optional[str] = "main",
        upstream: Optional[RemoteBranch] = None,
        push_remote: Optional[RemoteBranch] = None,
        refs: Optional[list[Ref]] = None,
        remotes: Optional[list[Remote]] = None,
    ) -> MagitRepository:
        return MagitRepository(
            root=tmp_path,
            remotes=remotes
            if remotes is not None
            else [Remote("origin", "git@example.com:o.git", "git@example.com:o.git")],
            refs=refs
            if refs is not None
            else [
                Ref("main", RefType.HEAD, commit="1111111aaaa"),
                Ref("v1.0.0", RefType.TAG, commit="2222222bbbb"),
            ],
            head=HeadState(
                name=head_name,
                commit="1111111aaaa",
                upstream=upstream,
                push_remote=push_remote,
            ),
        )

    return factory


@pytest.fixture
def repository(make_repository) -> MagitRepository:
    """Repository on ``main`` with no upstream and no push-remote."""
    return make_repository()


@pytest.fixture
def stub_host() -> StubHost:
    return StubHost()
