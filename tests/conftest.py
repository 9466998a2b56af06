import pytest

from certdeployer.request import DeploymentRequest

from .helpers import SERVER_XML


@pytest.fixture(autouse=True)
def certdeployer_home(tmp_path, monkeypatch):
    home = tmp_path / "home"
    monkeypatch.setenv("CERTDEPLOYER_HOME", str(home))
    return home


@pytest.fixture
def server_root(tmp_path):
    root = tmp_path / "TeamCity"
    conf = root / "conf"
    conf.mkdir(parents=True)
    keystore = root / "keystore" / ".keystore"
    (conf / "server.xml").write_text(SERVER_XML.format(keystore=keystore))
    return root


@pytest.fixture
def java_home(tmp_path):
    home = tmp_path / "jre"
    (home / "bin").mkdir(parents=True)
    (home / "bin" / "keytool").write_text("")
    return home


@pytest.fixture
def make_request(server_root, java_home):
    def _make(**overrides):
        fields = dict(
            bucket="ssl-dummy",
            object_name="certs/teamcity_cert.pfx",
            conf_dir=server_root / "conf",
            cert_dir=server_root / "Cert",
            keystore_password="s3cret-pass",
            java_home=java_home,
        )
        fields.update(overrides)
        return DeploymentRequest(**fields)
    return _make


@pytest.fixture(autouse=True)
def no_path_lookup(monkeypatch):
    # Keep command lines as built; runner resolves executables through PATH
    monkeypatch.setattr("shutil.which", lambda name: None)
