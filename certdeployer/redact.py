from __future__ import annotations

from typing import Iterable, List

REDACTED = "[REDACTED]"


def redact_string(s: str, secrets: Iterable[str]) -> str:
    for secret in secrets:
        if secret:
            s = s.replace(secret, REDACTED)
    return s


def redact_command(cmd: List[str], secrets: Iterable[str]) -> str:
    secrets = [s for s in secrets if s]
    return " ".join(redact_string(part, secrets) for part in cmd)
