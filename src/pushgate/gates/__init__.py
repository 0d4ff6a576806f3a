"""
Gates - Quality gate definition and execution.

Modules:
    models      - Check, CheckOutcome and GateResult
    runner      - Sequential fail-fast execution
    factory     - Build the format/lint/test list from a lint policy
    toolchains  - Per-ecosystem command presets
"""

from pushgate.gates.factory import LintPolicy, build_checks
from pushgate.gates.models import Check, CheckOutcome, CheckStatus, GateResult, GateStatus
from pushgate.gates.runner import GateRunner

__all__ = [
    "Check",
    "CheckOutcome",
    "CheckStatus",
    "GateResult",
    "GateStatus",
    "GateRunner",
    "LintPolicy",
    "build_checks",
]
