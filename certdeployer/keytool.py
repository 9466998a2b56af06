"""
keytool wrapper: locating the executable and importing PKCS#12 archives.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import List, Optional

from .errors import ConfigurationError
from .runner import run_command

logger = logging.getLogger(__name__)

EXECUTABLES = ("keytool.exe", "keytool")


def locate_keytool(java_home: Optional[Path]) -> Path:
    """
    Resolve keytool under a Java installation root.
    
    Args:
        java_home: JDK/JRE installation root
        
    Returns:
        Path to the keytool executable
        
    Raises:
        ConfigurationError: If no root is given or keytool is not found in it
    """
    if java_home is None or not str(java_home).strip():
        raise ConfigurationError("Java installation root not set (JAVA_HOME)", step="locate_keytool")

    bin_dir = Path(java_home) / "bin"
    for name in EXECUTABLES:
        candidate = bin_dir / name
        if candidate.is_file():
            logger.debug(f"Using keytool at {candidate}")
            return candidate

    raise ConfigurationError(f"keytool not found in {bin_dir}", step="locate_keytool")


def import_command(keytool: Path, source: Path, keystore: Path, password: str) -> List[str]:
    # Same password for the .pfx and the destination keystore
    return [
        str(keytool), "-importkeystore", "-noprompt",
        "-srckeystore", str(source),
        "-srcstoretype", "PKCS12",
        "-destkeystore", str(keystore),
        "-srcstorepass", password,
        "-deststorepass", password,
    ]


def import_certificate(keytool: Path, source: Path, keystore: Path, password: str) -> None:
    """Import a PKCS#12 archive, creating the keystore if it does not exist."""
    logger.info(f"Importing {source} into {keystore}")
    run_command(import_command(keytool, source, keystore, password), "import", secrets=[password])
