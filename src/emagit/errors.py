# emagit/errors.py
"""Exceptions raised by emagit.

Dismissed choosers and missing configuration are not errors: actions return
``None`` for those. Only failures that must reach the caller live here.
"""

from typing import Optional, Sequence


class EmagitError(Exception):
    """Base class for all emagit errors."""


class GitProcessError(EmagitError):
    """A git process exited with a non-zero status or could not be started."""

    def __init__(
        self,
        cmd: Sequence[str],
        returncode: int,
        stdout: str = "",
        stderr: str = "",
    ) -> None:
        self.cmd = list(cmd)
        self.returncode = returncode
        self.stdout = stdout
        self.stderr = stderr
        first_line = stderr.strip().splitlines()[0] if stderr.strip() else ""
        message = f"'{' '.join(self.cmd)}' failed with exit code {returncode}"
        if first_line:
            message += f": {first_line}"
        super().__init__(message)


class NoTargetChosenError(EmagitError):
    """A required interactive choice (e.g. the fixup target) yielded nothing."""

    def __init__(self, message: str, what: Optional[str] = None) -> None:
        self.what = what
        super().__init__(message)
