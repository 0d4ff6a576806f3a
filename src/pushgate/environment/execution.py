"""
Execution environments - how checks are resolved and spawned.

The gate runner never touches the process environment directly. It is handed
an ExecutionEnvironment, which makes a run a function of (checks, environment)
and lets tests substitute a fake.
"""

from __future__ import annotations

import os
import shutil
import subprocess
from pathlib import Path
from typing import Mapping, Protocol, Sequence

import structlog

from pushgate.environment.manifest import EnvironmentManifest
from pushgate.gates.models import (
    EXIT_COMMAND_NOT_FOUND,
    EXIT_NOT_EXECUTABLE,
    EXIT_SIGNAL_BASE,
    EXIT_TIMEOUT,
)

logger = structlog.get_logger()


class ExecutionEnvironment(Protocol):
    """Capability to resolve and run external commands."""

    def which(self, command: str) -> str | None:
        """Return the resolved path of a command, or None."""
        ...

    def execute(
        self,
        argv: Sequence[str],
        timeout_seconds: float | None = None,
    ) -> int:
        """Run a command to completion and return its exit code."""
        ...


def normalize_exit_code(returncode: int) -> int:
    """Map subprocess return codes to shell-style exit codes."""
    if returncode < 0:
        return EXIT_SIGNAL_BASE + (-returncode)
    return returncode


class SubprocessEnvironment:
    """
    Runs commands as child processes of the current process.

    stdout and stderr are inherited, so tool diagnostics reach the terminal
    exactly as the tool wrote them.
    """

    def __init__(
        self,
        cwd: Path | None = None,
        variables: Mapping[str, str] | None = None,
        inherit: bool = True,
    ) -> None:
        self.cwd = cwd or Path.cwd()
        self.variables = dict(variables or {})
        self.inherit = inherit

    @classmethod
    def from_manifest(
        cls,
        manifest: EnvironmentManifest,
        cwd: Path | None = None,
    ) -> SubprocessEnvironment:
        """Create an environment whose variables come from a manifest."""
        return cls(cwd=cwd, variables=manifest.variables_for(os.environ))

    def environ(self) -> dict[str, str]:
        """Full environment mapping passed to child processes."""
        base = dict(os.environ) if self.inherit else {}
        base.update(self.variables)
        return base

    def which(self, command: str) -> str | None:
        return shutil.which(command, path=self.environ().get("PATH"))

    def execute(
        self,
        argv: Sequence[str],
        timeout_seconds: float | None = None,
    ) -> int:
        try:
            completed = subprocess.run(
                list(argv),
                cwd=self.cwd,
                env=self.environ(),
                timeout=timeout_seconds,
            )
        except FileNotFoundError:
            logger.error("Command not found", command=argv[0])
            return EXIT_COMMAND_NOT_FOUND
        except OSError as e:
            # Exists but cannot be run, e.g. no exec bit.
            logger.error("Command not executable", command=argv[0], error=str(e))
            return EXIT_NOT_EXECUTABLE
        except subprocess.TimeoutExpired:
            logger.error("Command timed out", command=argv[0], timeout=timeout_seconds)
            return EXIT_TIMEOUT

        return normalize_exit_code(completed.returncode)
