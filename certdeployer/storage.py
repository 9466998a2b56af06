"""
Certificate fetch from a cloud object store via its CLI.
"""

from __future__ import annotations

import logging
from pathlib import Path, PurePosixPath
from typing import List

from .errors import ConfigurationError
from .runner import run_command

logger = logging.getLogger(__name__)

STEP = "fetch"

SCHEMES = {
    "gcs": "gs",
    "s3": "s3",
}


def object_url(provider: str, bucket: str, object_name: str) -> str:
    if provider not in SCHEMES:
        raise ConfigurationError(f"Unsupported object store provider: {provider}", step=STEP)
    return f"{SCHEMES[provider]}://{bucket}/{object_name.lstrip('/')}"


def staged_path(cert_dir: Path, object_name: str) -> Path:
    """Local path of the certificate: the object's base filename in cert_dir."""
    name = PurePosixPath(object_name).name
    if not name or object_name.endswith("/"):
        raise ConfigurationError(f"Object name has no file name: {object_name}", step=STEP)
    return Path(cert_dir) / name


def copy_command(provider: str, url: str, dest: Path) -> List[str]:
    if provider == "gcs":
        return ["gsutil", "cp", url, str(dest)]
    if provider == "s3":
        return ["aws", "s3", "cp", url, str(dest)]
    raise ConfigurationError(f"Unsupported object store provider: {provider}", step=STEP)


def fetch_certificate(provider: str, bucket: str, object_name: str, cert_dir: Path) -> Path:
    """
    Download the certificate object into cert_dir.
    
    Returns:
        Path of the downloaded file
        
    Raises:
        ExecutionError: If the copy command exits non-zero
    """
    url = object_url(provider, bucket, object_name)
    dest = staged_path(cert_dir, object_name)
    logger.info(f"Fetching {url} -> {dest}")
    run_command(copy_command(provider, url, dest), STEP)
    return dest
