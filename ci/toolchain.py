"""
Toolchain bootstrap steps for macOS build agents
Each step returns the environment later steps should run with
"""

import os
from typing import Dict, Iterable, Mapping

from .environment import cargo_home_bin, prepend_path, ssl_environment
from .runner import UsageError, capture, run, section
from .settings import AgentSettings


def install_mac_bootstrapper(settings: AgentSettings, env: Mapping[str, str], workdir: str = ".") -> Dict[str, str]:
    """Download and install the omnibus bootstrapper package"""
    section("Installing Latest Habitat Toolchain Omnibus package")
    package = os.path.join(workdir, settings.bootstrapper_package)

    run(["curl", "-sSfL", settings.bootstrapper_url, "-o", package], env=env)
    run(["sudo", "installer", "-pkg", package, "-target", "/"], env=env)
    os.remove(package)

    return prepend_path(env, settings.bootstrapper_bin)


def install_rust(settings: AgentSettings, env: Mapping[str, str]) -> Dict[str, str]:
    """Install rustup and select the configured toolchain"""
    section("Installing rust")
    run(f"curl {settings.rustup_install_url} -sSf | sh -s -- -y", env=env)

    env = prepend_path(env, cargo_home_bin(env))
    run(["rustup", "install", settings.rust_toolchain], env=env)
    run(["rustup", "default", settings.rust_toolchain], env=env)
    return env


def install_hab(settings: AgentSettings, env: Mapping[str, str]) -> Dict[str, str]:
    section("Installing hab")
    run(f"curl -sSfL {settings.hab_install_url} | sudo bash", env=env)

    version = capture(["hab", "--version"], env=env)
    section(f":habicat: Using {version}")
    return dict(env)


def hab_pkg_install(idents: Iterable[str], env: Mapping[str, str], binlink: bool = False) -> None:
    for ident in idents:
        command = ["sudo", "hab", "pkg", "install", ident]
        if binlink:
            command.append("--binlink")
        run(command, env=env)


def brew_install(formulae: Iterable[str], env: Mapping[str, str]) -> None:
    formulae = list(formulae)
    section(f"Installing {' '.join(formulae)} from homebrew")
    run(["brew", "install", *formulae], env=env)


def generate_origin_key(origin: str, env: Mapping[str, str]) -> None:
    run(["hab", "origin", "key", "generate", origin], env=env)


def install_keys_system_wide(env: Mapping[str, str], key_cache: str) -> None:
    """
    Copy the user's origin keys into the system key cache

    Raises:
        UsageError: if the user key cache is missing or holds no keys
    """
    section(":key: Moving keys to system-wide location")
    home = env.get("HOME") or os.path.expanduser("~")
    user_cache = os.path.join(home, ".hab", "cache", "keys")

    if not os.path.isdir(user_cache):
        raise UsageError(f"Origin key cache not found: {user_cache}")
    keys = sorted(
        os.path.join(user_cache, name)
        for name in os.listdir(user_cache)
        if os.path.isfile(os.path.join(user_cache, name))
    )
    if not keys:
        raise UsageError(f"No origin keys found in {user_cache}")

    run(["sudo", "mkdir", "-p", key_cache], env=env)
    run(["sudo", "cp", *keys, key_cache], env=env)


def osx_test_setup(settings: AgentSettings, env: Mapping[str, str]) -> Dict[str, str]:
    """Install the rust and cacerts packages used by macOS test runs"""
    section("Installing core/rust and core/cacerts")
    hab_pkg_install(["core/rust", "core/cacerts"], env)
    return {**env, **ssl_environment(settings)}
