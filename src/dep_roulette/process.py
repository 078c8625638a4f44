"""Child process helpers for package manager commands.

Commands are always spawned from an argument list, never through a shell, so
package names and versions are passed through verbatim.
"""

from __future__ import annotations

import logging
import shlex
import shutil
import subprocess
from pathlib import Path

log = logging.getLogger(__name__)


class CommandError(RuntimeError):
    """Raised when a command is missing, fails or times out."""


class CommandTimeoutError(CommandError):
    """Raised when a command does not finish within its timeout."""


def which(binary: str) -> str | None:
    """Return the full path of ``binary`` on PATH, or None."""
    return shutil.which(binary)


def run(*args: str, cwd: Path, timeout: float) -> str:
    """Run a command and return its stdout.

    Args:
        *args: Command and arguments (e.g., "npm", "view", "left-pad@1.3.0").
        cwd: Directory to run the command in (the project root).
        timeout: Seconds to wait before giving up.

    Raises:
        CommandTimeoutError: If the command outlives ``timeout``.
        CommandError: If the binary is missing or exits non-zero.
    """
    log.debug("Running %s in %s", shlex.join(args), cwd)
    try:
        result = subprocess.run(
            list(args),
            cwd=cwd,
            capture_output=True,
            text=True,
            encoding="utf-8",
            errors="replace",
            timeout=timeout,
            check=False,
        )
    except FileNotFoundError as exc:
        raise CommandError(f"{args[0]} is not installed or not on PATH") from exc
    except subprocess.TimeoutExpired as exc:
        raise CommandTimeoutError(f"{shlex.join(args)} timed out after {timeout:g}s") from exc

    if result.returncode != 0:
        detail = (result.stderr or "").strip() or "no error output"
        raise CommandError(f"{shlex.join(args)} exited with {result.returncode}: {detail}")

    return result.stdout
