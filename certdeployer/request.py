"""
Deployment request model.
"""

from pathlib import Path
from typing import Any, Dict, Literal, Optional

from pydantic import BaseModel, ConfigDict, SecretStr, field_validator


class DeploymentRequest(BaseModel):
    """Caller-supplied parameters for one deployment run."""

    model_config = ConfigDict(frozen=True)

    bucket: str
    object_name: str
    conf_dir: Path
    cert_dir: Path
    keystore_password: Optional[SecretStr] = None
    service_name: str = "TeamCity"
    java_home: Optional[Path] = None
    provider: Literal["gcs", "s3"] = "gcs"
    service_backend: Literal["windows", "systemd"] = "windows"
    server_config_name: str = "server.xml"

    @field_validator(
        "bucket", "object_name", "conf_dir", "cert_dir", "service_name", "server_config_name",
        mode="before",
    )
    @classmethod
    def _not_blank(cls, v: Any) -> Any:
        if v is None or not str(v).strip():
            raise ValueError("must not be empty")
        return v

    @field_validator("keystore_password", "java_home", mode="before")
    @classmethod
    def _blank_is_none(cls, v: Any) -> Any:
        # An empty environment variable counts as not supplied
        if isinstance(v, str) and not v.strip():
            return None
        return v

    @property
    def password(self) -> Optional[str]:
        if self.keystore_password is None:
            return None
        return self.keystore_password.get_secret_value() or None

    def redacted(self) -> Dict[str, Any]:
        """Request fields safe to log or persist."""
        data = self.model_dump(mode="json", exclude={"keystore_password"})
        data["keystore_password"] = "[REDACTED]" if self.password else None
        return data
