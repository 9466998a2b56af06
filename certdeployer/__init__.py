"""
certdeployer - Certificate deployment for Java-based HTTPS servers.

Fetches a PKCS#12 certificate from a cloud object store, imports it into the
keystore referenced by the server's configuration and restarts the service.
"""

__version__ = "0.1.0"
