"""Public facade for emagit.core: re-export main classes from CamelCase modules.

Keeps the CamelCase module names (Menu.py, Repository.py, ...),
but provides flat imports for convenience and stability.
"""

# Re-export classes/symbols from CamelCase modules
from .CommitOrchestrator import CommitEditorOptions, run_commit_like_command  # noqa: F401
from .Menu import Menu, MenuItem, MenuState, QuickItem, show_menu  # noqa: F401
from .Repository import MagitRepository, Ref, RefType, Remote, RemoteBranch  # noqa: F401
from .Switches import Switch, switches_to_args  # noqa: F401


__all__ = [
    "CommitEditorOptions",
    "run_commit_like_command",
    "Menu",
    "MenuItem",
    "MenuState",
    "QuickItem",
    "show_menu",
    "MagitRepository",
    "Ref",
    "RefType",
    "Remote",
    "RemoteBranch",
    "Switch",
    "switches_to_args",
]
