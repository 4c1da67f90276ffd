"""
Strict-mode command execution for build agent scripts
Every command either succeeds or stops the pipeline with its exit code
"""

import logging
import subprocess
from typing import Mapping, Optional, Sequence, Union

import click

logger = logging.getLogger(__name__)

Command = Union[str, Sequence[str]]


class CiError(Exception):
    """Base class for build agent failures"""

    exit_code = 1


class UsageError(CiError):
    """Malformed arguments or missing inputs"""


class CommandFailedError(CiError):
    """An external command exited non-zero"""

    def __init__(self, command: Command, returncode: int):
        self.command = command
        self.returncode = returncode
        self.exit_code = returncode if returncode > 0 else 1
        super().__init__(f"Command failed with exit code {returncode}: {format_command(command)}")


def format_command(command: Command) -> str:
    if isinstance(command, str):
        return command
    return " ".join(str(part) for part in command)


def _argv(command: Command):
    if isinstance(command, str):
        return ["bash", "-o", "pipefail", "-c", command]
    return [str(part) for part in command]


def section(title: str) -> None:
    """Print a Buildkite log group header"""
    click.echo(f"--- {title}")


def run(command: Command, cwd: Optional[str] = None, env: Optional[Mapping[str, str]] = None) -> None:
    """
    Run a command, raising CommandFailedError on a non-zero exit

    Args:
        command: argv list, or a shell string run under `bash -o pipefail -c`
        cwd: Working directory
        env: Complete environment for the child process (inherits when None)
    """
    logger.info("Running: %s%s", format_command(command), f" (in {cwd})" if cwd else "")
    completed = subprocess.run(_argv(command), cwd=cwd, env=dict(env) if env is not None else None)
    if completed.returncode != 0:
        raise CommandFailedError(command, completed.returncode)


def capture(command: Command, cwd: Optional[str] = None, env: Optional[Mapping[str, str]] = None) -> str:
    """Run a command and return its stripped stdout"""
    completed = subprocess.run(
        _argv(command),
        cwd=cwd,
        env=dict(env) if env is not None else None,
        stdout=subprocess.PIPE,
        text=True,
    )
    if completed.returncode != 0:
        raise CommandFailedError(command, completed.returncode)
    return completed.stdout.strip()
