# emagit/core/RefResolver.py
"""RefResolver.py
========================
Builds the candidate lists offered when an action needs a remote, an
upstream branch, a tag or a commit, and presents them through the host.

Candidates are computed fresh for each chooser invocation. A dismissed
chooser yields None; callers no-op on it.
"""

import logging
import re
from typing import TYPE_CHECKING, Optional

from emagit.core.Menu import QuickItem
from emagit.core.Repository import Ref, RefType, Remote
from emagit.integrations.GitBridge import recent_commits


if TYPE_CHECKING:
    from emagit.core.Repository import MagitRepository
    from emagit.ui.Host import BaseHost

logger = logging.getLogger("emagit")

SHORT_HASH_LENGTH = 7
LINE_SPLITTER = re.compile(r"\r?\n")


def short_hash(commit: Optional[str]) -> str:
    return commit[:SHORT_HASH_LENGTH] if commit else ""


def collapse_lines(text: str) -> str:
    """Joins multi-line process output into one line."""
    return LINE_SPLITTER.sub(" ", text)


def remote_branch_full_name_to_segments(
    full_name: str,
) -> tuple[Optional[str], Optional[str]]:
    """Splits ``"origin/feature/x"`` into ``("origin", "feature/x")``."""
    remote, sep, name = full_name.partition("/")
    if not sep or not remote or not name:
        return None, None
    return remote, name


def remote_quick_items(remotes: list[Remote]) -> list[QuickItem]:
    return [
        QuickItem(label=r.name, description=r.push_url or "", meta=r.name)
        for r in remotes
    ]


def upstream_candidates(
    head_name: Optional[str], refs: list[Ref], remotes: list[Remote]
) -> list[QuickItem]:
    """Upstream choices for ``head_name``, most likely first.

    When the first remote has no ``<remote>/<head>`` ref a synthetic one is
    prepended. Tags and the branch itself are left out, and the rest are
    ordered remote-tracking before local (stable within each kind).
    """
    choices = list(refs)

    if remotes and head_name:
        first_remote = remotes[0].name
        expected = f"{first_remote}/{head_name}"
        if not any(ref.name == expected for ref in choices):
            choices.insert(
                0, Ref(name=expected, type=RefType.REMOTE_HEAD, remote=first_remote)
            )

    candidates = [
        ref
        for ref in choices
        if ref.type != RefType.TAG and ref.name != head_name
    ]
    candidates.sort(key=lambda ref: ref.type, reverse=True)

    return [
        QuickItem(label=ref.name, description=short_hash(ref.commit), meta=ref.name)
        for ref in candidates
    ]


async def choose_remote(
    repository: "MagitRepository", host: "BaseHost", placeholder: str = "Remote"
) -> Optional[str]:
    return await host.choose(remote_quick_items(repository.remotes), placeholder)


async def choose_upstream(
    repository: "MagitRepository", host: "BaseHost"
) -> Optional[str]:
    head_name = repository.head.name if repository.head else None
    items = upstream_candidates(head_name, repository.refs, repository.remotes)
    return await host.choose(items, "Set upstream")


async def choose_tag(
    repository: "MagitRepository", host: "BaseHost", placeholder: str = "Tag"
) -> Optional[str]:
    items = [
        QuickItem(label=ref.name, description=short_hash(ref.commit), meta=ref.name)
        for ref in repository.refs_of_type(RefType.TAG)
    ]
    if not items:
        logger.debug("No tags to choose from in %s", repository.root)
        return None
    return await host.choose(items, placeholder)


async def choose_commit(
    repository: "MagitRepository", host: "BaseHost", placeholder: str = "Commit"
) -> Optional[str]:
    items = [
        QuickItem(label=short_hash(sha), description=subject, meta=sha)
        for sha, subject in await recent_commits(repository)
    ]
    if not items:
        return None
    return await host.choose(items, placeholder)
