"""
Certificate deployer: the linear fetch, stop, import and start sequence.
"""

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional

from .errors import ConfigurationError, DeployError
from .events import EventTypes, emit_event
from .ids import new_run_id
from .keytool import import_certificate, locate_keytool
from .request import DeploymentRequest
from .server_config import read_keystore_location
from .service import ServiceManager
from .state import create_run_dir, write_request_json
from .storage import fetch_certificate

logger = logging.getLogger(__name__)


@dataclass
class DeployResult:
    """Outcome of one deployment run."""
    run_id: str
    status: str  # "success" or "failed"
    error: Optional[str] = None
    failed_step: Optional[str] = None
    completed_steps: List[str] = field(default_factory=list)
    certificate: Optional[Path] = None
    keystore: Optional[Path] = None

    @property
    def ok(self) -> bool:
        return self.status == "success"

    def to_dict(self) -> Dict[str, Any]:
        return {
            "run_id": self.run_id,
            "status": self.status,
            "error": self.error,
            "failed_step": self.failed_step,
            "completed_steps": list(self.completed_steps),
            "certificate": str(self.certificate) if self.certificate else None,
            "keystore": str(self.keystore) if self.keystore else None,
        }


class _Journal:
    """Writes run events once opened, when journaling is on."""

    def __init__(self, run_id: str, enabled: bool):
        self.run_id = run_id
        self.enabled = enabled
        self.opened = False

    def open(self, request: DeploymentRequest) -> None:
        if not self.enabled:
            return
        try:
            create_run_dir(self.run_id)
            write_request_json(self.run_id, request.redacted())
        except OSError as e:
            raise ConfigurationError(f"Cannot create run journal: {e}", step="journal")
        self.opened = True

    def emit(self, event_type: str, data: Dict[str, Any]) -> None:
        if not self.opened:
            return
        try:
            emit_event(self.run_id, event_type, data)
        except OSError as e:
            logger.warning(f"Failed to write {event_type} event for run {self.run_id}: {e}")


def _ensure_dir(path: Path, step: str) -> None:
    try:
        path.mkdir(parents=True, exist_ok=True)
    except OSError as e:
        raise ConfigurationError(f"Cannot create directory {path}: {e}", step=step)


def _validate(request: DeploymentRequest) -> None:
    if not request.password:
        raise ConfigurationError(
            "Keystore password not provided (use --keystore-password or KEYSTORE_PASSWORD)",
            step="validate",
        )


def deploy(
    request: DeploymentRequest,
    services: Optional[ServiceManager] = None,
    run_id: Optional[str] = None,
    journal: bool = True,
) -> DeployResult:
    """
    Deploy a certificate: fetch, stop service, import, start service.

    Each step must succeed before the next runs. The first failure ends the
    run; nothing is retried and a stopped service is not restarted.

    Args:
        request: Deployment request
        services: Service manager (built from request.service_backend if omitted)
        run_id: Optional run ID (generated if not provided)
        journal: Record the run under the certdeployer home directory

    Returns:
        DeployResult
    """
    if run_id is None:
        run_id = new_run_id()

    log = _Journal(run_id, journal)
    result = DeployResult(run_id=run_id, status="failed")
    done = result.completed_steps

    try:
        # 1. validate; a rejected request leaves nothing on disk
        _validate(request)
        done.append("validate")
        log.open(request)
        log.emit(EventTypes.INIT, {"run_id": run_id, "request": request.redacted()})
        log.emit(EventTypes.VALIDATED, {})

        # 2. staging directory
        cert_dir = Path(request.cert_dir)
        _ensure_dir(cert_dir, "ensure_dirs")
        done.append("ensure_dirs")
        log.emit(EventTypes.DIRS_READY, {"cert_dir": str(cert_dir)})

        # 3. keystore location
        location = read_keystore_location(request.conf_dir, request.server_config_name)
        result.keystore = location.path
        done.append("read_config")
        log.emit(EventTypes.CONFIG_READ, {
            "config_file": str(location.config_file),
            "keystore": str(location.path),
        })

        _ensure_dir(location.path.parent, "ensure_keystore_dir")
        done.append("ensure_keystore_dir")
        log.emit(EventTypes.KEYSTORE_DIR_READY, {"dir": str(location.path.parent)})

        # 4. fetch
        certificate = fetch_certificate(request.provider, request.bucket, request.object_name, cert_dir)
        result.certificate = certificate
        done.append("fetch")
        log.emit(EventTypes.FETCH_DONE, {"certificate": str(certificate)})

        # 5. stop service
        if services is None:
            services = ServiceManager(request.service_backend)
        services.stop(request.service_name)
        done.append("stop_service")
        log.emit(EventTypes.SERVICE_STOPPED, {"service": request.service_name})

        # 6. keytool
        keytool = locate_keytool(request.java_home)
        done.append("locate_keytool")
        log.emit(EventTypes.KEYTOOL_FOUND, {"keytool": str(keytool)})

        # 7. import
        import_certificate(keytool, certificate, location.path, request.password)
        done.append("import")
        log.emit(EventTypes.IMPORT_DONE, {"keystore": str(location.path)})

        # 8. start service
        services.start(request.service_name)
        done.append("start_service")
        log.emit(EventTypes.SERVICE_STARTED, {"service": request.service_name})

    except DeployError as e:
        result.error = str(e)
        result.failed_step = e.step
        logger.error(f"Deployment {run_id} failed: {e}")
        hint = None
        if "stop_service" in done and "start_service" not in done:
            hint = f"Service {request.service_name} was left stopped"
            logger.warning(hint)
        log.emit(EventTypes.ERROR, {"reason": str(e), "step": e.step, "hint": hint})
        return result

    result.status = "success"
    logger.info(f"Deployment {run_id} succeeded")
    log.emit(EventTypes.DONE, result.to_dict())
    return result
