"""
Keystore discovery from the server's XML configuration (server.xml).
"""

import logging
import xml.etree.ElementTree as ET
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

from .errors import ConfigurationError

logger = logging.getLogger(__name__)

STEP = "read_config"


@dataclass(frozen=True)
class KeystoreLocation:
    """Keystore referenced by the first HTTPS connector."""
    path: Path
    config_file: Path
    password: Optional[str] = field(default=None, repr=False)  # read, never used


def _find_https_connector(root: ET.Element) -> Optional[ET.Element]:
    for connector in root.iter("Connector"):
        if connector.get("scheme", "").lower() == "https":
            return connector
    return None


def read_keystore_location(conf_dir: Path, config_name: str = "server.xml") -> KeystoreLocation:
    """
    Read the keystore path from the first connector whose scheme is https.
    
    Args:
        conf_dir: Server configuration directory
        config_name: Configuration file name inside conf_dir
        
    Returns:
        KeystoreLocation
        
    Raises:
        ConfigurationError: If the file is missing or malformed, or no
            https connector with a keystoreFile exists
    """
    conf_dir = Path(conf_dir)
    config_file = conf_dir / config_name

    if not config_file.is_file():
        raise ConfigurationError(f"Server configuration not found: {config_file}", step=STEP)

    try:
        root = ET.parse(config_file).getroot()
    except ET.ParseError as e:
        raise ConfigurationError(f"Cannot parse {config_file}: {e}", step=STEP)
    except OSError as e:
        raise ConfigurationError(f"Cannot read {config_file}: {e}", step=STEP)

    connector = _find_https_connector(root)
    if connector is None:
        raise ConfigurationError(f"No connector with scheme=\"https\" in {config_file}", step=STEP)

    keystore_file = (connector.get("keystoreFile") or "").strip()
    if not keystore_file:
        raise ConfigurationError(f"HTTPS connector in {config_file} has no keystoreFile", step=STEP)

    path = Path(keystore_file)
    if not path.is_absolute():
        # Tomcat resolves relative keystore paths against the server home
        path = conf_dir.parent / path

    logger.info(f"Keystore for HTTPS connector: {path}")
    return KeystoreLocation(path=path, config_file=config_file, password=connector.get("keystorePass"))
