"""
Event logging utilities for NDJSON format.
"""

import json
from datetime import datetime
from typing import Any, Dict, Optional

from .state import get_run_dir


# Predefined event types for consistency
class EventTypes:
    INIT = "INIT"
    VALIDATED = "VALIDATED"
    DIRS_READY = "DIRS_READY"
    CONFIG_READ = "CONFIG_READ"
    KEYSTORE_DIR_READY = "KEYSTORE_DIR_READY"
    FETCH_DONE = "FETCH_DONE"
    SERVICE_STOPPED = "SERVICE_STOPPED"
    KEYTOOL_FOUND = "KEYTOOL_FOUND"
    IMPORT_DONE = "IMPORT_DONE"
    SERVICE_STARTED = "SERVICE_STARTED"
    DONE = "DONE"
    ERROR = "ERROR"


STATUS_MAP = {
    EventTypes.INIT: "queued",
    EventTypes.VALIDATED: "validated",
    EventTypes.DIRS_READY: "preparing",
    EventTypes.CONFIG_READ: "preparing",
    EventTypes.KEYSTORE_DIR_READY: "preparing",
    EventTypes.FETCH_DONE: "fetched",
    EventTypes.SERVICE_STOPPED: "service_stopped",
    EventTypes.KEYTOOL_FOUND: "service_stopped",
    EventTypes.IMPORT_DONE: "imported",
    EventTypes.SERVICE_STARTED: "service_started",
    EventTypes.DONE: "succeeded",
    EventTypes.ERROR: "failed",
}


def emit_event(run_id: str, event_type: str, data: Dict[str, Any]) -> None:
    """
    Emit an event to the run's logs.ndjson file.
    
    Args:
        run_id: Run ID
        event_type: Event type (e.g., "INIT", "FETCH_DONE", "ERROR")
        data: Event data
    """
    logs_file = get_run_dir(run_id) / "logs.ndjson"
    
    event = {
        "ts": datetime.now().isoformat(),
        "type": event_type,
        "data": data
    }
    
    with open(logs_file, "a") as f:
        f.write(json.dumps(event, default=str) + "\n")
        f.flush()


def read_events(run_id: str) -> list[Dict[str, Any]]:
    """
    Read all events from a run's logs.ndjson file.
    
    Args:
        run_id: Run ID
        
    Returns:
        List of events
    """
    logs_file = get_run_dir(run_id) / "logs.ndjson"
    
    if not logs_file.exists():
        return []
    
    events = []
    with open(logs_file, "r") as f:
        for line in f:
            line = line.strip()
            if line:
                try:
                    events.append(json.loads(line))
                except json.JSONDecodeError:
                    continue  # Skip malformed lines
    
    return events


def get_last_event(run_id: str) -> Optional[Dict[str, Any]]:
    events = read_events(run_id)
    return events[-1] if events else None


def get_status_from_events(run_id: str) -> str:
    """
    Determine run status from its last event.
    
    Args:
        run_id: Run ID
        
    Returns:
        Status string
    """
    last_event = get_last_event(run_id)
    if not last_event:
        return "unknown"
    
    return STATUS_MAP.get(last_event.get("type", ""), "unknown")
