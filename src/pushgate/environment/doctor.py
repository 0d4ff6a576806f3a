"""
Doctor - Verify that the commands the gate needs are resolvable.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Sequence

import structlog

if TYPE_CHECKING:
    from pushgate.environment.execution import ExecutionEnvironment
    from pushgate.environment.manifest import EnvironmentManifest
    from pushgate.gates.models import Check

logger = structlog.get_logger()


@dataclass
class ToolStatus:
    """Resolution result for one required command."""

    command: str
    required_by: str
    path: str | None

    @property
    def found(self) -> bool:
        return self.path is not None


def diagnose(
    checks: Sequence[Check],
    manifest: EnvironmentManifest,
    environment: ExecutionEnvironment,
) -> list[ToolStatus]:
    """Resolve every check command and manifest tool, once each."""
    statuses: list[ToolStatus] = []
    seen: set[str] = set()

    wanted = [(check.command, f"check:{check.name}") for check in checks]
    wanted += [(tool, "manifest") for tool in manifest.tools]

    for command, required_by in wanted:
        if command in seen:
            continue
        seen.add(command)
        path = environment.which(command)
        if path is None:
            logger.warning("Command not found", command=command, required_by=required_by)
        statuses.append(ToolStatus(command=command, required_by=required_by, path=path))

    return statuses
