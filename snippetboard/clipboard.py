"""Copy text to the system clipboard through the platform's clipboard tool."""

from __future__ import annotations

import logging
import os
import shutil
import subprocess
import sys
from typing import List, Sequence

logger = logging.getLogger("snippetboard")

COPY_TIMEOUT_SECONDS = 5


def _candidate_commands() -> List[Sequence[str]]:
    if sys.platform == "darwin":
        return [["pbcopy"]]
    if sys.platform.startswith("win"):
        return [["clip"]]

    commands: List[Sequence[str]] = []
    if os.getenv("WAYLAND_DISPLAY"):
        commands.append(["wl-copy"])
    commands.append(["xclip", "-selection", "clipboard"])
    commands.append(["xsel", "--clipboard", "--input"])
    return commands


def find_copy_command() -> Sequence[str] | None:
    """First clipboard command available on this machine."""
    for command in _candidate_commands():
        if shutil.which(command[0]):
            return command
    return None


def copy_text(text: str) -> bool:
    """Put ``text`` on the clipboard. Returns ``False`` when that is not possible."""
    command = find_copy_command()
    if command is None:
        logger.warning("No clipboard tool found (tried pbcopy, clip, wl-copy, xclip, xsel)")
        return False

    try:
        result = subprocess.run(
            list(command),
            input=text.encode("utf-8"),
            check=False,
            stdout=subprocess.PIPE,
            stderr=subprocess.PIPE,
            timeout=COPY_TIMEOUT_SECONDS,
        )
    except (OSError, subprocess.TimeoutExpired) as exc:
        logger.warning("Clipboard command %s failed: %s", command[0], exc)
        return False

    if result.returncode != 0:
        stderr = result.stderr.decode("utf-8", errors="ignore")
        logger.warning("Clipboard command %s exited with %d: %s", command[0], result.returncode, stderr.strip())
        return False

    return True


__all__ = ["copy_text", "find_copy_command"]
