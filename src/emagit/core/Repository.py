# emagit/core/Repository.py
"""Repository.py
========================
In-memory model of the repository emagit operates on.

`MagitRepository` holds the configured remotes, the known refs and the HEAD
tracking state (upstream and push-remote). It is loaded once per invocation
from git, shared by reference through every `MenuState`, and mutated directly
by configure-then-retry actions after the matching `git config` write has
succeeded. `refresh()` is the single explicit re-read of that state.
"""

import logging
from dataclasses import dataclass, field
from enum import IntEnum
from pathlib import Path
from typing import Optional, Union

from emagit.integrations.GitBridge import (
    current_branch,
    git_run,
    head_commit,
    list_refs,
    read_config,
)


logger = logging.getLogger("emagit")

HEADS_PREFIX = "refs/heads/"
REMOTES_PREFIX = "refs/remotes/"
TAGS_PREFIX = "refs/tags/"


class RefType(IntEnum):
    """Kinds of refs; the numeric value is the upstream-candidate sort rank."""

    HEAD = 0
    REMOTE_HEAD = 1
    TAG = 2


@dataclass
class Ref:
    name: str
    type: RefType
    remote: Optional[str] = None
    commit: Optional[str] = None


@dataclass
class Remote:
    name: str
    fetch_url: Optional[str] = None
    push_url: Optional[str] = None


@dataclass
class RemoteBranch:
    """A branch on a remote, e.g. ``RemoteBranch(name="main", remote="origin")``."""

    name: str
    remote: str

    def __str__(self) -> str:
        return f"{self.remote}/{self.name}"


@dataclass
class HeadState:
    name: Optional[str] = None
    commit: Optional[str] = None
    upstream: Optional[RemoteBranch] = None
    push_remote: Optional[RemoteBranch] = None


@dataclass
class MagitRepository:
    """Git repository state shared by menus, actions and the commit orchestrator."""

    root: Path
    remotes: list[Remote] = field(default_factory=list)
    refs: list[Ref] = field(default_factory=list)
    head: Optional[HeadState] = None

    @classmethod
    async def load(cls, root: Union[str, Path]) -> "MagitRepository":
        repository = cls(root=Path(root))
        await repository.refresh()
        return repository

    async def refresh(self) -> None:
        """Re-reads remotes, refs and HEAD tracking configuration from git."""
        config = await read_config(self)
        self.remotes = parse_remotes(config)
        self.refs = parse_refs(await list_refs(self), self.remotes)

        name = await current_branch(self)
        self.head = HeadState(
            name=name,
            commit=await head_commit(self),
            upstream=upstream_from_config(config, name),
            push_remote=push_remote_from_config(config, name),
        )
        logger.debug(
            "Repository %s loaded: %d remotes, %d refs, HEAD=%s",
            self.root,
            len(self.remotes),
            len(self.refs),
            name,
        )

    async def set_config(self, key: str, value: str) -> None:
        """Writes a local git config value."""
        logger.info(f"Setting {key}={value} in {self.root}")
        await git_run(self, ["config", "--local", key, value])

    def refs_of_type(self, ref_type: RefType) -> list[Ref]:
        return [ref for ref in self.refs if ref.type == ref_type]


def parse_remotes(config: dict[str, str]) -> list[Remote]:
    """Builds remotes from ``git config --list`` output, in configuration order."""
    remotes: dict[str, Remote] = {}
    for key, value in config.items():
        if not key.startswith("remote."):
            continue
        if key.endswith(".url"):
            name = key[len("remote.") : -len(".url")]
            remote = remotes.setdefault(name, Remote(name))
            remote.fetch_url = value
        elif key.endswith(".pushurl"):
            name = key[len("remote.") : -len(".pushurl")]
            remote = remotes.setdefault(name, Remote(name))
            remote.push_url = value

    for remote in remotes.values():
        if remote.push_url is None:
            remote.push_url = remote.fetch_url
    return list(remotes.values())


def parse_refs(raw_refs: list[tuple[str, str]], remotes: list[Remote]) -> list[Ref]:
    """Turns ``(refname, commit)`` pairs into typed refs with short names."""
    # Longest names first so "origin/foo" wins over "origin" for nested remote names.
    remote_names = sorted((r.name for r in remotes), key=len, reverse=True)
    refs = []
    for refname, commit in raw_refs:
        if refname.startswith(HEADS_PREFIX):
            refs.append(Ref(refname[len(HEADS_PREFIX) :], RefType.HEAD, commit=commit))
        elif refname.startswith(REMOTES_PREFIX):
            short = refname[len(REMOTES_PREFIX) :]
            if short.endswith("/HEAD"):
                continue
            remote = next(
                (n for n in remote_names if short.startswith(n + "/")),
                short.split("/", 1)[0],
            )
            refs.append(Ref(short, RefType.REMOTE_HEAD, remote=remote, commit=commit))
        elif refname.startswith(TAGS_PREFIX):
            refs.append(Ref(refname[len(TAGS_PREFIX) :], RefType.TAG, commit=commit))
    return refs


def _branch_value(config: dict[str, str], branch: str, variable: str) -> Optional[str]:
    # git lowercases the variable name but keeps the subsection as written.
    return config.get(f"branch.{branch}.{variable.lower()}")


def upstream_from_config(
    config: dict[str, str], branch: Optional[str]
) -> Optional[RemoteBranch]:
    if not branch:
        return None
    remote = _branch_value(config, branch, "remote")
    merge = _branch_value(config, branch, "merge")
    if not remote or not merge:
        return None
    name = merge[len(HEADS_PREFIX) :] if merge.startswith(HEADS_PREFIX) else merge
    return RemoteBranch(name=name, remote=remote)


def push_remote_from_config(
    config: dict[str, str], branch: Optional[str]
) -> Optional[RemoteBranch]:
    if not branch:
        return None
    remote = _branch_value(config, branch, "pushRemote") or config.get(
        "remote.pushdefault"
    )
    if not remote:
        return None
    return RemoteBranch(name=branch, remote=remote)
