"""
State management for deployment runs.
"""

import json
from datetime import datetime
from pathlib import Path
from typing import Any, Dict

from .config import get_home
from .ids import is_valid_run_id


def get_run_dir(run_id: str) -> Path:
    """
    Get the directory for a specific run.
    
    Args:
        run_id: Run ID
        
    Returns:
        Path: Run directory
        
    Raises:
        ValueError: If run ID is invalid
    """
    if not is_valid_run_id(run_id):
        raise ValueError(f"Invalid run ID: {run_id}")
    
    return get_home() / run_id


def create_run_dir(run_id: str) -> Path:
    run_dir = get_run_dir(run_id)
    run_dir.mkdir(parents=True, exist_ok=True)
    return run_dir


def write_request_json(run_id: str, request_data: Dict[str, Any]) -> None:
    """
    Write the (already redacted) deployment request to request.json.
    
    Args:
        run_id: Run ID
        request_data: Request fields safe to persist
    """
    run_dir = get_run_dir(run_id)
    data = dict(request_data)
    data["created_at"] = datetime.now().isoformat()
    
    with open(run_dir / "request.json", "w") as f:
        json.dump(data, f, indent=2)


def read_request_json(run_id: str) -> Dict[str, Any]:
    """
    Read the deployment request recorded for a run.
    
    Raises:
        FileNotFoundError: If request.json doesn't exist
    """
    request_file = get_run_dir(run_id) / "request.json"
    
    if not request_file.exists():
        raise FileNotFoundError(f"Run {run_id} not found")
    
    with open(request_file, "r") as f:
        return json.load(f)


def list_runs() -> list[str]:
    """
    List all run IDs, most recent first.
    """
    home = get_home()
    
    if not home.exists():
        return []
    
    runs = [item.name for item in home.iterdir() if item.is_dir() and is_valid_run_id(item.name)]
    return sorted(runs, reverse=True)


def run_exists(run_id: str) -> bool:
    try:
        run_dir = get_run_dir(run_id)
    except ValueError:
        return False
    return run_dir.exists() and (run_dir / "request.json").exists()
