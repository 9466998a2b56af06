"""
Exception types raised by deployment steps.
"""

from typing import Optional


class DeployError(Exception):
    """Base class for every fatal deployment error."""

    step: Optional[str] = None


class ConfigurationError(DeployError):
    """Missing or invalid input: password, HTTPS connector, tool path."""

    def __init__(self, message: str, step: Optional[str] = None):
        super().__init__(message)
        self.step = step


class ExecutionError(DeployError):
    """An external process exited non-zero or could not be started."""

    def __init__(self, step: str, command: str, returncode: Optional[int], output: str = ""):
        self.step = step
        self.command = command
        self.returncode = returncode
        self.output = output
        if returncode is None:
            message = f"{step}: could not run '{command}'"
        else:
            message = f"{step}: '{command}' exited with status {returncode}"
        if output:
            message = f"{message}: {output}"
        super().__init__(message)
