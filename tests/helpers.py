from unittest.mock import Mock


SERVER_XML = """<?xml version="1.0" encoding="UTF-8"?>
<Server port="8105" shutdown="SHUTDOWN">
  <Service name="Catalina">
    <Connector port="8111" protocol="org.apache.coyote.http11.Http11NioProtocol" />
    <Connector port="443" protocol="org.apache.coyote.http11.Http11NioProtocol"
               SSLEnabled="true" scheme="https" secure="true"
               keystoreFile="{keystore}" keystorePass="changeit" />
  </Service>
</Server>
"""

HTTP_ONLY_XML = """<?xml version="1.0" encoding="UTF-8"?>
<Server port="8105" shutdown="SHUTDOWN">
  <Service name="Catalina">
    <Connector port="8111" scheme="http" />
  </Service>
</Server>
"""


class FakeRun:
    """Stands in for subprocess.run and records every command."""

    def __init__(self, fail_on=None):
        self.calls = []
        self.fail_on = fail_on

    def __call__(self, cmd, **kwargs):
        self.calls.append(list(cmd))
        result = Mock()
        result.stdout = ""
        result.stderr = ""
        result.returncode = 0
        if self.fail_on and self.fail_on(cmd):
            result.returncode = 1
            result.stderr = "simulated failure"
        return result
