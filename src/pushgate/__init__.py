"""
pushgate: fail-fast quality gate for version-control hooks.

Runs an ordered list of checks (format, lint, test) against the working
tree and stops at the first failure, exiting with that check's status.
"""

__version__ = "0.1.0"

from pushgate.errors import CheckFailed, ConfigError, PushgateError
from pushgate.gates.factory import LintPolicy, build_checks
from pushgate.gates.models import Check, GateResult
from pushgate.gates.runner import GateRunner

__all__ = [
    "Check",
    "CheckFailed",
    "ConfigError",
    "GateResult",
    "GateRunner",
    "LintPolicy",
    "PushgateError",
    "build_checks",
]
