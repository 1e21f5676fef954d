"""Run the external build tool under a deadline."""

import os
import signal
import subprocess
import time
from collections.abc import Sequence
from pathlib import Path

from common.logger import get_logger

from .models import BuildOutcome

logger = get_logger(__name__)

BUILD_TIMEOUT_ERROR = "Build timeout"

# Grace period for a killed process group to release its pipes
KILL_GRACE_SECONDS = 5.0


def _kill_process_tree(process: subprocess.Popen) -> None:
    """Kill a process and everything it spawned."""
    if os.name == "posix":
        try:
            os.killpg(process.pid, signal.SIGKILL)
        except (ProcessLookupError, PermissionError):
            pass
    else:
        process.kill()


def run_process(
    command: Sequence[str],
    cwd: Path,
    timeout: float,
    timeout_error: str = BUILD_TIMEOUT_ERROR,
) -> BuildOutcome:
    """
    Run a command to completion or until the timeout, whichever comes first.

    The command runs in its own process group so that, on timeout, tools that
    fork workers (npm, vite) are killed along with the parent.

    Args:
        command: Program and arguments
        cwd: Working directory
        timeout: Deadline in seconds
        timeout_error: Error text recorded when the deadline passes

    Returns:
        BuildOutcome with exit status, duration and separately captured output
    """
    start = time.monotonic()

    try:
        process = subprocess.Popen(
            list(command),
            cwd=cwd,
            stdout=subprocess.PIPE,
            stderr=subprocess.PIPE,
            stdin=subprocess.DEVNULL,
            text=True,
            errors="replace",
            start_new_session=(os.name == "posix"),
        )
    except OSError as e:
        return BuildOutcome(
            success=False,
            exit_code=None,
            duration=time.monotonic() - start,
            error=str(e),
        )

    try:
        stdout, stderr = process.communicate(timeout=timeout)
    except subprocess.TimeoutExpired:
        logger.warning(f"{' '.join(command)} exceeded {timeout:g}s, killing it")
        _kill_process_tree(process)
        try:
            stdout, stderr = process.communicate(timeout=KILL_GRACE_SECONDS)
        except subprocess.TimeoutExpired:
            stdout, stderr = "", ""
        return BuildOutcome(
            success=False,
            exit_code=None,
            duration=time.monotonic() - start,
            stdout=stdout or "",
            stderr=stderr or "",
            error=timeout_error,
            timed_out=True,
        )
    finally:
        if process.poll() is None:
            _kill_process_tree(process)
            process.wait()

    return BuildOutcome(
        success=process.returncode == 0,
        exit_code=process.returncode,
        duration=time.monotonic() - start,
        stdout=stdout,
        stderr=stderr,
    )


class BuildExecutor:
    """Invokes the build command for a source tree. Never retries."""

    def __init__(self, command: Sequence[str] = ("npm", "run", "build")):
        """Initialize the executor.

        Args:
            command: Build command run inside the tree
        """
        self.command = tuple(command)

    def run(self, tree: Path, timeout: float = 120.0) -> BuildOutcome:
        """Build a tree.

        Args:
            tree: Root of the source tree
            timeout: Seconds before the build is killed and reported as "Build timeout"

        Returns:
            The build outcome
        """
        outcome = run_process(self.command, cwd=tree, timeout=timeout)
        logger.debug(
            f"Build in {tree} finished: success={outcome.success} "
            f"exit={outcome.exit_code} in {outcome.duration:.1f}s"
        )
        return outcome
