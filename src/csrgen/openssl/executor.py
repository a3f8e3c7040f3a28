from __future__ import annotations

import subprocess
from typing import Optional, Tuple

from ..errors import EmptyCommand, ProcessLaunchFailure
from ..utils.logging import get_logger

log = get_logger("openssl")


def execute(command_line: str, cwd: Optional[str] = None) -> Tuple[str, str]:
    """Run ``command_line`` and return its decoded (stdout, stderr).

    The line is split on whitespace with no shell or quoting rules, so an
    argument cannot contain spaces. A non-zero exit status is only logged;
    callers inspect stderr or the produced files. Raises EmptyCommand for a
    blank line and ProcessLaunchFailure when the program cannot be started.
    """
    parts = command_line.split()
    if not parts:
        raise EmptyCommand("Empty command")

    try:
        result = subprocess.run(parts, stdin=None, capture_output=True, cwd=cwd)
    except OSError as e:
        raise ProcessLaunchFailure(f"Failed to execute command: {e}") from e

    if result.returncode == 0:
        log.debug("command executed successfully: %s", parts[0])
    else:
        log.error("command failed with exit code %s: %s", result.returncode, parts[0])

    return (
        result.stdout.decode("utf-8", errors="replace"),
        result.stderr.decode("utf-8", errors="replace"),
    )


__all__ = ["execute"]
