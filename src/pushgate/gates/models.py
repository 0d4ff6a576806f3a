"""
Data models for checks and gate results.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from pushgate.errors import CheckFailed

# Exit codes reported when the tool itself gave none.
EXIT_TIMEOUT = 124
EXIT_NOT_EXECUTABLE = 126
EXIT_COMMAND_NOT_FOUND = 127
EXIT_SIGNAL_BASE = 128


class CheckStatus(str, Enum):
    """Outcome of a single check."""

    PENDING = "pending"
    PASSED = "passed"
    FAILED = "failed"
    SKIPPED = "skipped"


class GateStatus(str, Enum):
    """Aggregate outcome of a gate run."""

    PASSED = "passed"
    FAILED = "failed"


@dataclass(frozen=True)
class Check:
    """One step of the quality gate."""

    name: str
    command: str
    arguments: tuple[str, ...] = ()
    timeout_seconds: float | None = None

    @property
    def argv(self) -> list[str]:
        return [self.command, *self.arguments]

    def to_dict(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "command": self.command,
            "arguments": list(self.arguments),
            "timeout_seconds": self.timeout_seconds,
        }


@dataclass
class CheckOutcome:
    """Recorded outcome of a check within a gate run."""

    name: str
    status: CheckStatus = CheckStatus.PENDING
    exit_code: int | None = None
    duration_ms: int | None = None

    def to_dict(self) -> dict[str, Any]:
        result: dict[str, Any] = {"name": self.name, "status": self.status.value}
        if self.exit_code is not None:
            result["exit_code"] = self.exit_code
        if self.duration_ms is not None:
            result["duration_ms"] = self.duration_ms
        return result


@dataclass
class GateResult:
    """Result of running an ordered list of checks."""

    executed: list[CheckOutcome] = field(default_factory=list)

    @property
    def overall(self) -> GateStatus:
        if any(o.status == CheckStatus.FAILED for o in self.executed):
            return GateStatus.FAILED
        return GateStatus.PASSED

    @property
    def passed(self) -> bool:
        return self.overall == GateStatus.PASSED

    @property
    def failure(self) -> CheckFailed | None:
        for outcome in self.executed:
            if outcome.status == CheckStatus.FAILED:
                return CheckFailed(outcome.name, outcome.exit_code or 1)
        return None

    @property
    def exit_code(self) -> int:
        """Process exit code: 0 on success, else the failing check's code."""
        failure = self.failure
        return failure.exit_code if failure else 0

    def outcome(self, name: str) -> CheckOutcome:
        for outcome in self.executed:
            if outcome.name == name:
                return outcome
        raise KeyError(name)

    def raise_for_failure(self) -> None:
        failure = self.failure
        if failure is not None:
            raise failure

    def to_dict(self) -> dict[str, Any]:
        return {
            "overall": self.overall.value,
            "exit_code": self.exit_code,
            "executed": [o.to_dict() for o in self.executed],
        }
