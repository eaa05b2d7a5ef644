"""Discovery and invocation of the external tools protokit wraps.

protokit never parses or compiles schemas itself. Linting, breaking-change
detection and code generation are delegated to ``buf`` and ``protoc``; this
module finds them on ``PATH`` and runs them as subprocesses.
"""

from __future__ import annotations

import logging
import shlex
import shutil
import subprocess
from collections.abc import Sequence
from pathlib import Path

from .exceptions import ToolFailedError, ToolNotFoundError

logger = logging.getLogger(__name__)

INSTALL_HINTS: dict[str, str] = {
    "buf": "Install it with: make buf-install",
    "protoc": "Install it from https://grpc.io/docs/protoc-installation/",
    "go": "Install it from https://go.dev/doc/install",
    "git": "Install it from https://git-scm.com/downloads",
}


def find_tool(name: str) -> str | None:
    """Look up an executable on PATH.

    Args:
        name: Executable name (e.g. "buf")

    Returns:
        Absolute path to the executable, or None if it is not installed
    """
    return shutil.which(name)


def require_tool(name: str) -> str:
    """Resolve an executable or fail with installation instructions.

    Args:
        name: Executable name

    Returns:
        Absolute path to the executable

    Raises:
        ToolNotFoundError: If the executable is not on PATH
    """
    path = find_tool(name)
    if path is None:
        raise ToolNotFoundError(name, INSTALL_HINTS.get(name))
    logger.debug("Resolved %s -> %s", name, path)
    return path


def run_tool(
    args: Sequence[str],
    *,
    cwd: Path,
    check: bool = True,
    capture: bool = False,
) -> subprocess.CompletedProcess[str]:
    """Run an external command and wait for it to finish.

    Args:
        args: Command and arguments
        cwd: Working directory for the command
        check: Raise ToolFailedError on a non-zero exit status
        capture: Capture stdout/stderr instead of inheriting the terminal

    Returns:
        The completed process

    Raises:
        ToolNotFoundError: If the executable vanished between lookup and run
        ToolFailedError: If ``check`` is set and the command fails
    """
    logger.debug("Running %s (cwd=%s)", shlex.join(args), cwd)
    try:
        result = subprocess.run(
            list(args),
            cwd=cwd,
            capture_output=capture,
            text=True,
        )
    except FileNotFoundError as e:
        raise ToolNotFoundError(args[0], INSTALL_HINTS.get(Path(args[0]).name)) from e

    logger.debug("%s exited with status %d", args[0], result.returncode)
    if check and result.returncode != 0:
        raise ToolFailedError(args, result.returncode)
    return result
