"""
Build the macOS release of the `hab` binary
"""

import logging
import os
from typing import Dict, Mapping, Optional

from .environment import base_environment, load_env_file, ssl_environment
from .runner import run, section
from .settings import AgentSettings
from .toolchain import (
    brew_install,
    generate_origin_key,
    install_hab,
    install_keys_system_wide,
    install_mac_bootstrapper,
    install_rust,
)

logger = logging.getLogger(__name__)

PLAN_BUILD_SCRIPT = os.path.join("components", "plan-build", "bin", "hab-plan-build.sh")
PLAN_CONTEXT = os.path.join("components", "hab")
LAST_BUILD_ENV = os.path.join("results", "last_build.env")


def read_build_manifest(root: str = ".") -> Dict[str, str]:
    """Parse results/last_build.env written by the plan build, if present"""
    path = os.path.join(root, LAST_BUILD_ENV)
    if not os.path.isfile(path):
        logger.warning("No build manifest at %s", path)
        return {}
    return load_env_file(path)


def build_mac_release(settings: AgentSettings, root: str = ".",
                      environ: Optional[Mapping[str, str]] = None) -> Dict[str, str]:
    """
    Bootstrap the agent and build components/hab with hab-plan-build

    Returns:
        The build manifest (pkg_ident, pkg_target, pkg_artifact, ...)
    """
    env = base_environment(environ)

    env_file = os.path.join(root, settings.buildkite_env_file)
    if os.path.isfile(env_file):
        env.update(load_env_file(env_file))
    else:
        logger.info("No pipeline environment file at %s", env_file)

    env.update(ssl_environment(settings))
    env = install_mac_bootstrapper(settings, env, workdir=root)
    env = install_rust(settings, env)
    env = install_hab(settings, env)
    brew_install(["wget"], env)

    generate_origin_key(settings.hab_origin, env)
    install_keys_system_wide(env, settings.hab_key_cache)

    section(":habicat: :hammer_and_wrench: Building 'hab'")
    run(["sudo", "-E", "bash", PLAN_BUILD_SCRIPT, PLAN_CONTEXT], cwd=root, env=env)

    manifest = read_build_manifest(root)
    if manifest.get("pkg_ident"):
        logger.info("Built %s (%s)", manifest["pkg_ident"], manifest.get("pkg_target", "unknown target"))
    return manifest
