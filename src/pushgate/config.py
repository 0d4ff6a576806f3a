"""
Gate Configuration - Settings for the pushgate quality gate.

Loaded from a YAML file (default .pushgate/config.yaml). A missing file
yields the defaults, which reproduce the strict cargo gate.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import yaml

from pushgate.environment.manifest import EnvironmentManifest
from pushgate.errors import ConfigError
from pushgate.gates.factory import LintPolicy, build_checks, get_profile
from pushgate.gates.models import Check
from pushgate.gates.toolchains import get_toolchain

DEFAULT_CONFIG_PATH = Path(".pushgate/config.yaml")
CONFIG_ENV_VAR = "PUSHGATE_CONFIG"


def _rule_set(value: Any, key: str) -> frozenset[str]:
    if value is None:
        return frozenset()
    if isinstance(value, str):
        return frozenset({value})
    if isinstance(value, list):
        return frozenset(str(v) for v in value)
    raise ConfigError(f"lint.{key} must be a list of rule ids")


def _timeout(value: Any, key: str = "timeout_seconds") -> float | None:
    if value is None:
        return None
    try:
        timeout = float(value)
    except (TypeError, ValueError):
        raise ConfigError(f"{key} must be a number") from None
    if timeout <= 0:
        raise ConfigError(f"{key} must be positive")
    return timeout


def _parse_check(data: Any, index: int, default_timeout: float | None) -> Check:
    if not isinstance(data, dict):
        raise ConfigError(f"checks[{index}] must be a mapping")
    name = data.get("name")
    command = data.get("command")
    if not name or not command:
        raise ConfigError(f"checks[{index}] requires 'name' and 'command'")

    arguments = data.get("arguments") or []
    if not isinstance(arguments, list):
        raise ConfigError(f"checks[{index}].arguments must be a list")

    timeout = data.get("timeout_seconds", default_timeout)
    return Check(
        name=str(name),
        command=str(command),
        arguments=tuple(str(a) for a in arguments),
        timeout_seconds=_timeout(timeout, f"checks[{index}].timeout_seconds"),
    )


@dataclass
class GateConfig:
    """Main gate configuration."""

    toolchain: str = "cargo"
    profile: str = "strict"

    # Overrides applied on top of the profile; None keeps the profile value.
    deny_warnings: bool | None = None
    forbidden: frozenset[str] | None = None
    suppressions: frozenset[str] = field(default_factory=frozenset)

    timeout_seconds: float | None = None
    checks: list[Check] = field(default_factory=list)  # explicit list replaces the preset
    environment: EnvironmentManifest = field(default_factory=EnvironmentManifest)

    # Paths
    config_path: Path = field(default_factory=lambda: DEFAULT_CONFIG_PATH)
    repo_root: Path = field(default_factory=Path.cwd)

    @classmethod
    def load(cls, config_path: Path) -> GateConfig:
        """Load configuration from a YAML file."""
        if not config_path.exists():
            config = cls(config_path=config_path)
            config.repo_root = _repo_root_for(config_path)
            return config

        try:
            with open(config_path) as f:
                data = yaml.safe_load(f) or {}
        except yaml.YAMLError as e:
            raise ConfigError(f"Invalid YAML in {config_path}: {e}") from e

        if not isinstance(data, dict):
            raise ConfigError(f"{config_path} must contain a mapping")

        return cls.from_dict(data, config_path)

    @classmethod
    def from_dict(cls, data: dict[str, Any], config_path: Path | None = None) -> GateConfig:
        """Create config from dictionary."""
        data = dict(data or {})
        lint_data = data.get("lint") or {}
        if not isinstance(lint_data, dict):
            raise ConfigError("lint must be a mapping")

        toolchain = str(data.get("toolchain", "cargo"))
        profile = str(data.get("profile", "strict"))
        # Fail early on typos rather than at run time.
        get_toolchain(toolchain)
        get_profile(profile, toolchain)

        timeout_seconds = _timeout(data.get("timeout_seconds"))

        checks_data = data.get("checks") or []
        if not isinstance(checks_data, list):
            raise ConfigError("checks must be a list")
        checks = [_parse_check(c, i, timeout_seconds) for i, c in enumerate(checks_data)]

        forbidden = _rule_set(lint_data["forbidden"], "forbidden") if "forbidden" in lint_data else None
        suppressions = _rule_set(lint_data.get("suppressions"), "suppressions")
        conflicts = (forbidden or frozenset()) & suppressions
        if conflicts:
            raise ConfigError(
                f"Lint rules both forbidden and suppressed: {', '.join(sorted(conflicts))}"
            )

        deny_warnings = lint_data.get("deny_warnings")
        config = cls(
            toolchain=toolchain,
            profile=profile,
            deny_warnings=None if deny_warnings is None else bool(deny_warnings),
            forbidden=forbidden,
            suppressions=suppressions,
            timeout_seconds=timeout_seconds,
            checks=checks,
            environment=EnvironmentManifest.from_dict(data.get("environment")),
        )

        if config_path:
            config.config_path = config_path
            config.repo_root = _repo_root_for(config_path)

        # Surface forbidden/suppressed conflicts at load time.
        config.lint_policy()
        return config

    def lint_policy(self) -> LintPolicy:
        """Resolve the profile plus overrides into a LintPolicy."""
        base = get_profile(self.profile, self.toolchain)
        policy = LintPolicy(
            deny_warnings=base.deny_warnings if self.deny_warnings is None else self.deny_warnings,
            forbidden=base.forbidden if self.forbidden is None else self.forbidden,
            suppressions=base.suppressions,
        )
        return policy.with_suppressions(self.suppressions) if self.suppressions else policy

    def build_checks(self) -> list[Check]:
        """Checks to run, in order."""
        if self.checks:
            return list(self.checks)
        return build_checks(get_toolchain(self.toolchain), self.lint_policy(), self.timeout_seconds)

    def to_dict(self) -> dict[str, Any]:
        """Serialize config to dictionary."""
        lint: dict[str, Any] = {"suppressions": sorted(self.suppressions)}
        if self.deny_warnings is not None:
            lint["deny_warnings"] = self.deny_warnings
        if self.forbidden is not None:
            lint["forbidden"] = sorted(self.forbidden)

        result: dict[str, Any] = {
            "toolchain": self.toolchain,
            "profile": self.profile,
            "lint": lint,
            "timeout_seconds": self.timeout_seconds,
            "environment": self.environment.to_dict(),
        }
        if self.checks:
            result["checks"] = [c.to_dict() for c in self.checks]
        return result


def _repo_root_for(config_path: Path) -> Path:
    """Config lives in <repo>/.pushgate/config.yaml."""
    parent = config_path.parent
    if parent.name == ".pushgate":
        parent = parent.parent
    return parent.resolve()
