"""
Configuration sources: the journal home directory and the YAML defaults file.
"""

import os
from pathlib import Path
from typing import Any, Dict

import yaml

from .errors import ConfigurationError

# Deploy options a defaults file may set. The password is not one of them:
# it comes from the command line or KEYSTORE_PASSWORD only.
DEFAULT_KEYS = frozenset({
    "bucket",
    "object_name",
    "conf_dir",
    "cert_dir",
    "service_name",
    "java_home",
    "provider",
    "service_backend",
    "server_config_name",
})


def get_home() -> Path:
    """
    Get the certdeployer home directory holding run journals.
    
    Returns:
        Path: Home directory
    """
    home = os.environ.get("CERTDEPLOYER_HOME", ".certdeployer")
    return Path(home).resolve()


def load_defaults(path: Path) -> Dict[str, Any]:
    """
    Load deploy option defaults from a YAML file.
    
    Args:
        path: YAML file with a mapping of option names to values
        
    Returns:
        Dict of option defaults keyed by option name
        
    Raises:
        ConfigurationError: If the file is unreadable, not a mapping,
            or names an unknown option
    """
    try:
        text = Path(path).read_text()
    except OSError as e:
        raise ConfigurationError(f"Cannot read defaults file {path}: {e}")

    try:
        data = yaml.safe_load(text) or {}
    except yaml.YAMLError as e:
        raise ConfigurationError(f"Invalid YAML in {path}: {e}")

    if not isinstance(data, dict):
        raise ConfigurationError(f"Defaults file {path} must contain a mapping")

    # Accept dashed keys as they appear on the command line
    defaults = {str(k).replace("-", "_"): v for k, v in data.items()}
    unknown = sorted(set(defaults) - DEFAULT_KEYS)
    if unknown:
        raise ConfigurationError(f"Unknown option(s) in {path}: {', '.join(unknown)}")

    return {k: str(v) for k, v in defaults.items() if v is not None}
