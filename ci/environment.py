"""
Environment variable plumbing for build and test commands
"""

import os
import tempfile
from pathlib import Path
from typing import Dict, Mapping, Optional

from dotenv import dotenv_values

from .settings import AgentSettings


def base_environment(environ: Optional[Mapping[str, str]] = None) -> Dict[str, str]:
    """Copy of the process environment to layer build variables onto"""
    return dict(os.environ if environ is None else environ)


def load_env_file(path) -> Dict[str, str]:
    """
    Read a KEY=value environment file such as .buildkite/env

    Raises:
        FileNotFoundError: if the file does not exist
    """
    env_path = Path(path)
    if not env_path.is_file():
        raise FileNotFoundError(f"Environment file not found: {env_path}")
    return {key: value for key, value in dotenv_values(env_path).items() if value is not None}


def ssl_environment(settings: AgentSettings) -> Dict[str, str]:
    return {"SSL_CERT_FILE": settings.ssl_cert_file}


def native_linkage_environment(settings: AgentSettings) -> Dict[str, str]:
    """
    Variables that let the native crates find the bootstrapper libraries

    sodium, libarchive and openssl link statically; openssl and zeromq are
    found through the bootstrapper prefix; the library paths make libarchive's
    dynamic dependencies (xz, bzip2) resolvable at test runtime, and
    pkg-config finds them at build time.
    """
    lib = settings.bootstrapper_lib
    return {
        "SODIUM_STATIC": "true",
        "LIBARCHIVE_STATIC": "true",
        "OPENSSL_STATIC": "true",
        "OPENSSL_DIR": lib,
        "LIBZMQ_PREFIX": lib,
        "LD_LIBRARY_PATH": lib,
        "LIBRARY_PATH": lib,
        "PKG_CONFIG_PATH": f"{lib}/pkgconfig",
    }


def prepend_path(env: Mapping[str, str], *dirs: str) -> Dict[str, str]:
    """Return a copy of env with dirs placed in front of PATH"""
    updated = dict(env)
    current = updated.get("PATH", "")
    parts = [d for d in dirs if d]
    if current:
        parts.append(current)
    updated["PATH"] = os.pathsep.join(parts)
    return updated


def cargo_home_bin(environ: Mapping[str, str]) -> str:
    """Directory rustup installs cargo and rustc into"""
    cargo_home = environ.get("CARGO_HOME")
    if cargo_home:
        return os.path.join(cargo_home, "bin")
    home = environ.get("HOME") or os.path.expanduser("~")
    return os.path.join(home, ".cargo", "bin")


def make_testing_fs_root() -> str:
    """Create the scratch filesystem root the component tests write into"""
    return tempfile.mkdtemp(prefix="testing-fs-root-", dir="/tmp")
