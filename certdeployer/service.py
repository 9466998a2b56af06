"""
Start/stop of the dependent OS service.
"""

from __future__ import annotations

import logging
from typing import List

from .errors import ConfigurationError
from .runner import run_command

logger = logging.getLogger(__name__)

BACKENDS = ("windows", "systemd")


def _ps_quote(value: str) -> str:
    return "'" + value.replace("'", "''") + "'"


class ServiceManager:
    """Drives the OS service manager. Every call blocks until the manager returns."""

    def __init__(self, backend: str = "windows"):
        if backend not in BACKENDS:
            raise ConfigurationError(f"Unsupported service backend: {backend}")
        self.backend = backend

    def command(self, action: str, name: str) -> List[str]:
        if self.backend == "windows":
            verb = "Stop-Service" if action == "stop" else "Start-Service"
            return [
                "powershell", "-NoProfile", "-NonInteractive",
                "-Command", f"{verb} -Name {_ps_quote(name)} -ErrorAction Stop",
            ]
        return ["systemctl", action, name]

    def stop(self, name: str) -> None:
        # An already stopped service is not special-cased: the call must succeed
        logger.info(f"Stopping service {name}")
        run_command(self.command("stop", name), "stop_service")

    def start(self, name: str) -> None:
        logger.info(f"Starting service {name}")
        run_command(self.command("start", name), "start_service")
