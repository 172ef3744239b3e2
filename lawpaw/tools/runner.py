import subprocess
from collections.abc import Sequence
from pathlib import Path

from lawpaw.logging.logger import Log
from lawpaw.tools.exceptions import ToolInvocationError, ToolTimeoutError

_STDERR_EXCERPT_CHARS = 500


def run_tool(
    argv: Sequence[str | Path],
    timeout_seconds: float,
    cwd: Path | None = None,
) -> subprocess.CompletedProcess[str]:
    """Run an external tool from an explicit argument vector.

    Args:
        argv: Program followed by its arguments. Never passed through a shell.
        timeout_seconds: Wall-clock limit; the process is killed when exceeded.
        cwd: Optional working directory.

    Returns:
        The completed process with captured stdout and stderr.

    Raises:
        ToolTimeoutError: if the timeout elapses.
        ToolInvocationError: if the binary is missing, cannot be started,
            or exits with a non-zero status.
    """
    args = [str(arg) for arg in argv]
    if not args:
        raise ValueError("argv must contain at least the program name")
    tool = Path(args[0]).name
    Log.debug(f"Running {tool}: {args}")

    try:
        completed = subprocess.run(
            args,
            capture_output=True,
            text=True,
            timeout=timeout_seconds,
            cwd=cwd,
            check=False,
        )
    except FileNotFoundError as exc:
        raise ToolInvocationError(tool, f"executable not found ({exc})") from exc
    except subprocess.TimeoutExpired as exc:
        raise ToolTimeoutError(tool, f"timed out after {timeout_seconds}s") from exc
    except OSError as exc:
        raise ToolInvocationError(tool, f"could not be started: {exc}") from exc

    if completed.returncode != 0:
        stderr = (completed.stderr or "").strip()[-_STDERR_EXCERPT_CHARS:]
        raise ToolInvocationError(
            tool,
            f"exited with status {completed.returncode}: {stderr or 'no output'}",
            returncode=completed.returncode,
            stderr=stderr,
        )
    return completed
