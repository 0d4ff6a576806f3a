"""
GateRunner - Execute quality gates in order and stop at the first failure.

Responsibilities:
- Run each check's command through the injected execution environment
- Record passed/failed/skipped outcomes and exit codes
- Fail fast: nothing after a failing check is executed

Checks are never retried. A formatting or lint failure is a function of the
tree's content, so a second attempt against the same tree cannot pass.
"""

from __future__ import annotations

import time
from typing import TYPE_CHECKING, Sequence

import structlog

from pushgate.gates.models import Check, CheckOutcome, CheckStatus, GateResult

if TYPE_CHECKING:
    from pushgate.environment.execution import ExecutionEnvironment

logger = structlog.get_logger()


class GateRunner:
    """
    Runs an ordered list of checks sequentially.
    """

    def __init__(self, environment: ExecutionEnvironment) -> None:
        self.environment = environment

    def run(self, checks: Sequence[Check]) -> GateResult:
        """
        Run checks in order, halting on the first non-zero exit.

        Every input check appears in the result; those after a failure are
        marked skipped.
        """
        if not checks:
            raise ValueError("At least one check is required")

        result = GateResult(executed=[CheckOutcome(name=check.name) for check in checks])
        failed = False

        for check, outcome in zip(checks, result.executed):
            if failed:
                outcome.status = CheckStatus.SKIPPED
                logger.debug("Skipping check", check=check.name)
                continue

            self._run_check(check, outcome)
            failed = outcome.status == CheckStatus.FAILED

        logger.info(
            "Gate completed",
            overall=result.overall.value,
            exit_code=result.exit_code,
            executed=sum(1 for o in result.executed if o.status != CheckStatus.SKIPPED),
            total=len(result.executed),
        )
        return result

    def _run_check(self, check: Check, outcome: CheckOutcome) -> None:
        logger.info("Running check", check=check.name, argv=" ".join(check.argv))
        started = time.monotonic()

        exit_code = self.environment.execute(check.argv, timeout_seconds=check.timeout_seconds)

        outcome.duration_ms = int((time.monotonic() - started) * 1000)
        outcome.exit_code = exit_code
        outcome.status = CheckStatus.PASSED if exit_code == 0 else CheckStatus.FAILED

        log = logger.info if exit_code == 0 else logger.error
        log(
            "Check completed",
            check=check.name,
            passed=exit_code == 0,
            exit_code=exit_code,
            duration_ms=outcome.duration_ms,
        )


def run(checks: Sequence[Check], environment: ExecutionEnvironment) -> GateResult:
    """Run checks against an environment with a fresh GateRunner."""
    return GateRunner(environment).run(checks)
