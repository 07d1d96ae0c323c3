# emagit/ui/MessageEditor.py
"""MessageEditor.py
========================
The commit message editor git runs while a commit-family command is in
progress (``emagit edit --wait FILE``).

The file git prepared is shown with its comment lines dimmed, then lines are
read from the controlling terminal until ``:confirm`` or ``:cancel``. On
confirm the typed lines replace the message (the existing message is kept
when nothing was typed, which is what reword needs) and the process exits 0.
Cancel, end of input or Ctrl-C exit 1, which git reports as a failed editor
and so aborts the commit.
"""

import logging
import sys
from pathlib import Path
from typing import Optional, TextIO, Union

from rich.console import Console
from rich.panel import Panel
from rich.text import Text


logger = logging.getLogger("emagit")

CONFIRM_COMMAND = ":confirm"
CANCEL_COMMAND = ":cancel"
INSTRUCTIONS = f"Type {CONFIRM_COMMAND} to finish, or {CANCEL_COMMAND} to abort"
TTY_PATH = "/dev/tty"

EXIT_CONFIRMED = 0
EXIT_CANCELLED = 1


def open_terminal() -> tuple[TextIO, TextIO, bool]:
    """Opens the controlling terminal; git captures our stdout, so it is not usable.

    Returns ``(input, output, owned)`` where ``owned`` tells whether the
    streams must be closed by the caller.
    """
    try:
        tty_in = open(TTY_PATH, "r", encoding="utf-8")
    except OSError:
        return sys.stdin, sys.stderr, False
    try:
        tty_out = open(TTY_PATH, "w", encoding="utf-8")
    except OSError:
        tty_in.close()
        return sys.stdin, sys.stderr, False
    return tty_in, tty_out, True


def render_existing(existing: str) -> Text:
    text = Text()
    for line in existing.splitlines():
        style = "dim" if line.startswith("#") else ""
        text.append(line + "\n", style=style)
    return text


def build_message(existing: str, typed_lines: list[str]) -> str:
    """Typed lines replace the message part of ``existing``; comment lines are kept."""
    if not any(line.strip() for line in typed_lines):
        return existing

    comments = [line for line in existing.splitlines() if line.startswith("#")]
    message = "\n".join(typed_lines).strip("\n") + "\n"
    if comments:
        message += "\n" + "\n".join(comments) + "\n"
    return message


def compose_message(
    path: Union[str, Path],
    input_stream: Optional[TextIO] = None,
    output_stream: Optional[TextIO] = None,
) -> int:
    """Lets the user write the message in ``path``; returns the process exit code."""
    path = Path(path)
    try:
        existing = path.read_text(encoding="utf-8")
    except FileNotFoundError:
        existing = ""

    owned = False
    if input_stream is None or output_stream is None:
        input_stream, output_stream, owned = open_terminal()

    console = Console(file=output_stream, highlight=False)
    typed_lines: list[str] = []
    try:
        console.print(Panel(render_existing(existing), title=path.name))
        console.print(f"[bold]{INSTRUCTIONS}[/]")
        while True:
            line = input_stream.readline()
            if not line:
                logger.info("Message editor reached end of input; cancelling.")
                return EXIT_CANCELLED
            line = line.rstrip("\r\n")
            command = line.strip()
            if command == CONFIRM_COMMAND:
                break
            if command == CANCEL_COMMAND:
                logger.info("Commit message cancelled by user.")
                return EXIT_CANCELLED
            typed_lines.append(line)
    except KeyboardInterrupt:
        logger.info("Message editor interrupted; cancelling.")
        return EXIT_CANCELLED
    finally:
        if owned:
            input_stream.close()
            output_stream.close()

    path.write_text(build_message(existing, typed_lines), encoding="utf-8")
    logger.info(f"Commit message written to {path}")
    return EXIT_CONFIRMED
