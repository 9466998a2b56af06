"""
Tests for the object store, keytool and service manager wrappers.
"""

from pathlib import Path
from unittest.mock import patch

import pytest

from certdeployer.errors import ConfigurationError, ExecutionError
from certdeployer.keytool import import_certificate, import_command, locate_keytool
from certdeployer.service import ServiceManager
from certdeployer.storage import copy_command, fetch_certificate, object_url, staged_path

from .helpers import FakeRun


class TestStorage:
    """Test certificate fetch commands."""

    def test_object_url(self):
        assert object_url("gcs", "ssl-dummy", "teamcity_cert.pfx") == "gs://ssl-dummy/teamcity_cert.pfx"
        assert object_url("s3", "bucket", "/certs/a.pfx") == "s3://bucket/certs/a.pfx"

    def test_object_url_unknown_provider(self):
        with pytest.raises(ConfigurationError, match="provider"):
            object_url("azure", "b", "o")

    def test_staged_path_uses_base_name(self, tmp_path):
        assert staged_path(tmp_path, "a/b/cert.pfx") == tmp_path / "cert.pfx"

    def test_staged_path_rejects_directory_key(self, tmp_path):
        with pytest.raises(ConfigurationError):
            staged_path(tmp_path, "")
        with pytest.raises(ConfigurationError):
            staged_path(tmp_path, "certs/")

    def test_s3_copy_command(self, tmp_path):
        dest = tmp_path / "c.pfx"
        assert copy_command("s3", "s3://b/c.pfx", dest) == ["aws", "s3", "cp", "s3://b/c.pfx", str(dest)]

    def test_fetch_failure(self, tmp_path):
        with patch("subprocess.run", new=FakeRun(fail_on=lambda cmd: True)):
            with pytest.raises(ExecutionError) as exc:
                fetch_certificate("gcs", "b", "c.pfx", tmp_path)
        assert exc.value.step == "fetch"
        assert exc.value.returncode == 1

    def test_fetch_returns_destination(self, tmp_path):
        fake = FakeRun()
        with patch("subprocess.run", new=fake):
            dest = fetch_certificate("gcs", "b", "dir/c.pfx", tmp_path)
        assert dest == tmp_path / "c.pfx"
        assert fake.calls == [["gsutil", "cp", "gs://b/dir/c.pfx", str(tmp_path / "c.pfx")]]


class TestKeytool:
    """Test keytool discovery and import."""

    def test_locate_unix_name(self, java_home):
        assert locate_keytool(java_home) == java_home / "bin" / "keytool"

    def test_locate_prefers_exe(self, java_home):
        (java_home / "bin" / "keytool.exe").write_text("")
        assert locate_keytool(java_home) == java_home / "bin" / "keytool.exe"

    def test_locate_without_home(self):
        with pytest.raises(ConfigurationError, match="JAVA_HOME"):
            locate_keytool(None)

    def test_locate_missing_binary(self, tmp_path):
        with pytest.raises(ConfigurationError, match="keytool not found") as exc:
            locate_keytool(tmp_path)
        assert exc.value.step == "locate_keytool"

    def test_import_command(self):
        cmd = import_command(Path("kt"), Path("c.pfx"), Path("ks.jks"), "pw")
        assert cmd[:3] == ["kt", "-importkeystore", "-noprompt"]
        assert cmd[cmd.index("-srcstoretype") + 1] == "PKCS12"
        assert cmd[cmd.index("-srcstorepass") + 1] == "pw"
        assert cmd[cmd.index("-deststorepass") + 1] == "pw"

    def test_import_failure_hides_password(self):
        with patch("subprocess.run", new=FakeRun(fail_on=lambda cmd: True)):
            with pytest.raises(ExecutionError) as exc:
                import_certificate(Path("kt"), Path("c.pfx"), Path("ks.jks"), "topsecret")
        assert "topsecret" not in str(exc.value)
        assert "[REDACTED]" in str(exc.value)


class TestServiceManager:
    """Test service stop/start commands."""

    def test_windows_commands(self):
        sm = ServiceManager("windows")
        assert sm.command("stop", "TeamCity") == [
            "powershell", "-NoProfile", "-NonInteractive",
            "-Command", "Stop-Service -Name 'TeamCity' -ErrorAction Stop",
        ]
        assert sm.command("start", "TeamCity")[-1] == "Start-Service -Name 'TeamCity' -ErrorAction Stop"

    def test_windows_quotes_service_name(self):
        cmd = ServiceManager().command("stop", "it's")
        assert cmd[-1] == "Stop-Service -Name 'it''s' -ErrorAction Stop"

    def test_systemd_commands(self):
        sm = ServiceManager("systemd")
        assert sm.command("stop", "teamcity") == ["systemctl", "stop", "teamcity"]

    def test_unknown_backend(self):
        with pytest.raises(ConfigurationError):
            ServiceManager("launchd")

    def test_stop_failure_is_error(self):
        with patch("subprocess.run", new=FakeRun(fail_on=lambda cmd: True)):
            with pytest.raises(ExecutionError) as exc:
                ServiceManager("systemd").stop("teamcity")
        assert exc.value.step == "stop_service"
