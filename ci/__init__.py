"""
Build agent tooling for the Habitat CI pipeline
Toolchain bootstrap, component tests, macOS release builds and website deploys
"""

from .runner import CiError, CommandFailedError, UsageError, run, section
from .settings import AgentSettings, get_settings

__all__ = [
    "AgentSettings",
    "CiError",
    "CommandFailedError",
    "UsageError",
    "get_settings",
    "run",
    "section",
]
