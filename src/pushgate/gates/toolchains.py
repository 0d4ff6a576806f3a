"""
Toolchain presets - format, lint and test invocations per ecosystem.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from pushgate.errors import ConfigError


@dataclass(frozen=True)
class Toolchain:
    """Commands and lint flag templates for one ecosystem."""

    name: str
    format_argv: tuple[str, ...]
    lint_argv: tuple[str, ...]
    test_argv: tuple[str, ...]
    warnings_flag: str | None = None
    deny_template: str = "-D{rule}"
    allow_template: str = "-A{rule}"
    description: str = field(default="", compare=False)

    def deny_flag(self, rule: str) -> str:
        return self.deny_template.format(rule=rule)

    def allow_flag(self, rule: str) -> str:
        return self.allow_template.format(rule=rule)


CARGO = Toolchain(
    name="cargo",
    format_argv=("cargo", "fmt", "--check"),
    lint_argv=("cargo", "clippy", "--"),
    test_argv=("cargo", "test"),
    warnings_flag="-Dwarnings",
    deny_template="-D{rule}",
    allow_template="-A{rule}",
    description="Rust project (cargo fmt/clippy/test).",
)

PYTHON = Toolchain(
    name="python",
    format_argv=("ruff", "format", "--check"),
    lint_argv=("ruff", "check"),
    test_argv=("pytest",),
    warnings_flag=None,
    deny_template="--extend-select={rule}",
    allow_template="--extend-ignore={rule}",
    description="Python project (ruff format/ruff check/pytest).",
)

TOOLCHAINS: dict[str, Toolchain] = {tc.name: tc for tc in (CARGO, PYTHON)}


def get_toolchain(name: str) -> Toolchain:
    """Look up a toolchain preset by name."""
    try:
        return TOOLCHAINS[name]
    except KeyError:
        known = ", ".join(sorted(TOOLCHAINS))
        raise ConfigError(f"Unknown toolchain '{name}' (known: {known})") from None
