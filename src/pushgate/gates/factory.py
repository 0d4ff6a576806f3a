"""
Check-list factory.

Both historical hook scripts ran the same three steps and differed only in
lint flags. They are expressed here as one factory parameterized by a
LintPolicy, with the two variants kept as named profiles.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from pushgate.errors import ConfigError
from pushgate.gates.models import Check
from pushgate.gates.toolchains import Toolchain

FORMAT = "format"
LINT = "lint"
TEST = "test"

DEAD_CODE = "dead_code"
UNWRAP_USED = "clippy::unwrap_used"
UNUSED_VARIABLE = "F841"


@dataclass(frozen=True)
class LintPolicy:
    """Which lint findings fail the gate."""

    deny_warnings: bool = True
    forbidden: frozenset[str] = field(default_factory=frozenset)
    suppressions: frozenset[str] = field(default_factory=frozenset)

    def __post_init__(self) -> None:
        overlap = self.forbidden & self.suppressions
        if overlap:
            raise ConfigError(
                f"Lint rules both forbidden and suppressed: {', '.join(sorted(overlap))}"
            )

    def with_suppressions(self, rules: frozenset[str] | set[str]) -> LintPolicy:
        """Return a copy with extra suppressions; suppressing wins over forbidding."""
        rules = frozenset(rules)
        return LintPolicy(
            deny_warnings=self.deny_warnings,
            forbidden=self.forbidden - rules,
            suppressions=self.suppressions | rules,
        )

    def flags(self, toolchain: Toolchain) -> list[str]:
        """Lint arguments for a toolchain, in a stable order."""
        flags: list[str] = []
        if self.deny_warnings and toolchain.warnings_flag:
            flags.append(toolchain.warnings_flag)
        flags.extend(toolchain.deny_flag(rule) for rule in sorted(self.forbidden))
        flags.extend(toolchain.allow_flag(rule) for rule in sorted(self.suppressions))
        return flags


PROFILE_NAMES = ("relaxed", "strict")

# Rule ids are toolchain specific, so each toolchain carries its own profiles.
PROFILES: dict[str, dict[str, LintPolicy]] = {
    "cargo": {
        "strict": LintPolicy(forbidden=frozenset({UNWRAP_USED})),
        "relaxed": LintPolicy(suppressions=frozenset({DEAD_CODE})),
    },
    "python": {
        "strict": LintPolicy(),
        "relaxed": LintPolicy(suppressions=frozenset({UNUSED_VARIABLE})),
    },
}


def get_profile(name: str, toolchain: str = "cargo") -> LintPolicy:
    """Look up a named profile for a toolchain."""
    try:
        return PROFILES[toolchain][name]
    except KeyError:
        known = ", ".join(PROFILE_NAMES)
        raise ConfigError(f"Unknown profile '{name}' (known: {known})") from None


def build_checks(
    toolchain: Toolchain,
    policy: LintPolicy,
    timeout_seconds: float | None = None,
) -> list[Check]:
    """
    Build the format, lint and test checks, in that order.

    Cheap checks come first so a formatting slip fails before the test
    suite is compiled. Only the lint check depends on the policy.
    """
    lint_command, *lint_args = toolchain.lint_argv
    format_command, *format_args = toolchain.format_argv
    test_command, *test_args = toolchain.test_argv

    return [
        Check(FORMAT, format_command, tuple(format_args), timeout_seconds),
        Check(LINT, lint_command, (*lint_args, *policy.flags(toolchain)), timeout_seconds),
        Check(TEST, test_command, tuple(test_args), timeout_seconds),
    ]
