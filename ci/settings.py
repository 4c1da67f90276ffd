"""
Build agent configuration read from the process environment
"""

import os
import posixpath
from typing import Mapping, Optional
from urllib.parse import urlparse

DEFAULT_BOOTSTRAPPER_URL = (
    "https://s3-us-west-2.amazonaws.com/shain-bk-test/mac-bootstrapper-1.0.0-latest.pkg"
)
DEFAULT_HAB_INSTALL_URL = (
    "https://raw.githubusercontent.com/habitat-sh/habitat/master/components/hab/install.sh"
)


class AgentSettings:
    """Settings for one build agent invocation"""

    def __init__(self, environ: Optional[Mapping[str, str]] = None):
        env = os.environ if environ is None else environ

        # Certificates and toolchain sources
        self.ssl_cert_file = env.get("SSL_CERT_FILE") or "/usr/local/etc/openssl/cert.pem"
        self.bootstrapper_url = env.get("MAC_BOOTSTRAPPER_URL") or DEFAULT_BOOTSTRAPPER_URL
        self.bootstrapper_prefix = env.get("MAC_BOOTSTRAPPER_PREFIX") or "/opt/mac-bootstrapper/embedded"
        self.rustup_install_url = env.get("RUSTUP_INSTALL_URL") or "https://sh.rustup.rs"
        self.rust_toolchain = env.get("RUST_TOOLCHAIN") or "stable"
        self.hab_install_url = env.get("HAB_INSTALL_URL") or DEFAULT_HAB_INSTALL_URL

        # Habitat origin and keys
        self.hab_origin = env.get("HAB_ORIGIN") or "habitat-ci"
        self.hab_key_cache = env.get("HAB_KEY_CACHE") or "/hab/cache/keys"
        self.buildkite_env_file = env.get("BUILDKITE_ENV_FILE") or ".buildkite/env"

        # Website deploy
        self.release_channel = env.get("RELEASE_CHANNEL") or "stable"
        self.dns_suffix = env.get("DNS_SUFFIX") or ""
        self.fastly_fqdn = env.get("FASTLY_FQDN") or ""

    @property
    def bootstrapper_lib(self) -> str:
        return posixpath.join(self.bootstrapper_prefix, "lib")

    @property
    def bootstrapper_bin(self) -> str:
        return posixpath.join(self.bootstrapper_prefix, "bin")

    @property
    def bootstrapper_package(self) -> str:
        """File name the bootstrapper package is downloaded to"""
        return posixpath.basename(urlparse(self.bootstrapper_url).path)


def get_settings(environ: Optional[Mapping[str, str]] = None) -> AgentSettings:
    """Get settings for the current process environment"""
    return AgentSettings(environ)
