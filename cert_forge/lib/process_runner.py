"""Run external commands with the operator's terminal attached."""

import subprocess
from collections.abc import Sequence

from .errors import ProcessExitError, ProcessSpawnError, ProcessTimeoutError
from .logging_config import LOGGER


def run_process(executable: str, args: Sequence[str], timeout: float | None = None) -> None:
    """Run a command, inheriting stdin/stdout/stderr.

    The command's own prompts (e.g. a provisioner password) reach the
    operator directly.

    Args:
        executable: Program name or path
        args: Ordered arguments
        timeout: Seconds to wait; None waits indefinitely

    Raises:
        ProcessSpawnError: If the program cannot be started
        ProcessExitError: If it exits non-zero
        ProcessTimeoutError: If an explicit timeout expires
    """
    LOGGER.debug("Running %s %s", executable, " ".join(args))
    try:
        completed = subprocess.run([executable, *args], check=False, timeout=timeout)
    except OSError as e:
        raise ProcessSpawnError(executable, e) from e
    except subprocess.TimeoutExpired as e:
        raise ProcessTimeoutError(executable, e.timeout) from e

    if completed.returncode != 0:
        raise ProcessExitError(executable, completed.returncode)
