"""
Run IDs: r-YYYYMMDD-hhmmss-xxxx, sortable by start time.
"""

import re
import secrets
import string
from datetime import datetime
from typing import Optional

RUN_ID_RE = re.compile(r"r-\d{8}-\d{6}-[a-z0-9]{4}")

_SUFFIX_ALPHABET = string.ascii_lowercase + string.digits


def new_run_id(now: Optional[datetime] = None) -> str:
    now = now or datetime.now()
    suffix = "".join(secrets.choice(_SUFFIX_ALPHABET) for _ in range(4))
    return f"r-{now:%Y%m%d-%H%M%S}-{suffix}"


def is_valid_run_id(run_id: str) -> bool:
    """Run IDs double as directory names, so only the exact format is accepted."""
    return RUN_ID_RE.fullmatch(run_id) is not None
