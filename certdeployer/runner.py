"""
Synchronous execution of external tools.
"""

from __future__ import annotations

import logging
import shutil
import subprocess
from typing import Iterable, List

from .errors import ExecutionError
from .redact import redact_command, redact_string

logger = logging.getLogger(__name__)

# Lines of stderr/stdout kept in error messages
OUTPUT_TAIL_LINES = 20


def _tail(text: str, secrets: List[str]) -> str:
    lines = [line for line in (text or "").strip().splitlines() if line.strip()]
    return redact_string("\n".join(lines[-OUTPUT_TAIL_LINES:]), secrets)


def run_command(cmd: List[str], step: str, secrets: Iterable[str] = ()) -> subprocess.CompletedProcess:
    """
    Run an external command and wait for it to exit.
    
    Args:
        cmd: Command and arguments
        step: Deployment step name, used in errors
        secrets: Values to mask when the command is logged
        
    Returns:
        The completed process
        
    Raises:
        ExecutionError: If the command cannot be started or exits non-zero
    """
    secrets = [s for s in secrets if s]
    shown = redact_command(cmd, secrets)
    # which() applies PATHEXT, so gsutil.cmd and friends resolve on Windows
    program = shutil.which(cmd[0]) or cmd[0]
    cmd = [program, *cmd[1:]]
    logger.debug(f"[{step}] running: {shown}")

    try:
        proc = subprocess.run(cmd, check=False, capture_output=True, text=True)
    except OSError as e:
        logger.error(f"[{step}] failed to start {cmd[0]}: {e}")
        raise ExecutionError(step, shown, None, str(e)) from e

    if proc.returncode != 0:
        output = _tail(proc.stderr, secrets) or _tail(proc.stdout, secrets)
        logger.error(f"[{step}] exited with status {proc.returncode}")
        raise ExecutionError(step, shown, proc.returncode, output)

    logger.debug(f"[{step}] completed")
    return proc
