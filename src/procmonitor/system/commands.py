"""
Command execution utilities.

This module runs the process-enumeration commands used by the command-based
sources and checks which of them are available on the system.
"""

import logging
import os
import shlex
import shutil
import subprocess
from typing import Dict, Optional, Sequence, Tuple

from ..validation import ErrorSeverity, handle_subprocess_error

logger = logging.getLogger(__name__)

DEFAULT_COMMAND_TIMEOUT = 30.0


def run_command(
    command: Sequence[str],
    timeout: Optional[float] = DEFAULT_COMMAND_TIMEOUT,
    env: Optional[Dict[str, str]] = None,
) -> Tuple[int, str, str]:
    """Execute a command and capture its output with robust error handling.

    Args:
        command: The command and its arguments.
        timeout: Seconds to wait before the command is killed, None to wait forever.
        env: Extra environment variables merged over the current environment.

    Returns:
        Tuple of (return_code, stdout_string, stderr_string).
        return_code is -1 for execution errors, including timeouts.

    Note:
        Uses UTF-8 decoding with error replacement so odd bytes in process
        names never break parsing.
    """
    command_str = shlex.join(command)
    logger.debug(f"Executing command: '{command_str}'")

    run_env = None
    if env:
        run_env = os.environ.copy()
        run_env.update(env)

    try:
        process = subprocess.run(
            list(command),
            capture_output=True,
            text=True,
            encoding="utf-8",
            errors="replace",
            env=run_env,
            timeout=timeout,
            check=False,
        )
        return process.returncode, process.stdout, process.stderr
    except FileNotFoundError as e:
        error_msg = f"Command not found: {command[0]}"
        logger.error(f"{error_msg}: {type(e).__name__}: {e}")
        return -1, "", f"Error: Command not found '{command[0]}'"
    except subprocess.TimeoutExpired as e:
        logger.error(f"Command '{command_str}' timed out after {e.timeout}s")
        return -1, "", f"Error: Command timed out after {e.timeout}s"
    except OSError as e:
        handle_subprocess_error(e, command_str, severity=ErrorSeverity.ERROR, reraise=False, logger=logger)
        return -1, "", f"An unexpected error occurred: {e}"


def is_command_available(name: str) -> bool:
    """Check if an executable is found in the system PATH."""
    return shutil.which(name) is not None
