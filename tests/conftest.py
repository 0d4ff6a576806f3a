"""Shared fixtures."""

from __future__ import annotations

from typing import Callable, Sequence

import pytest
import structlog

from pushgate.gates.factory import build_checks, get_profile
from pushgate.gates.models import Check
from pushgate.gates.toolchains import CARGO


class FakeEnvironment:
    """
    In-memory execution environment.

    Exit codes are looked up by check command + first argument ("cargo fmt"),
    then by command alone; anything unlisted exits 0. A callable may be
    given instead to decide from the full argv.
    """

    def __init__(
        self,
        exit_codes: dict[str, int] | None = None,
        decide: Callable[[Sequence[str]], int] | None = None,
        missing: set[str] | None = None,
    ) -> None:
        self.exit_codes = exit_codes or {}
        self.decide = decide
        self.missing = missing or set()
        self.calls: list[list[str]] = []
        self.timeouts: list[float | None] = []

    def which(self, command: str) -> str | None:
        if command in self.missing:
            return None
        return f"/usr/bin/{command}"

    def execute(self, argv: Sequence[str], timeout_seconds: float | None = None) -> int:
        self.calls.append(list(argv))
        self.timeouts.append(timeout_seconds)
        if self.decide is not None:
            return self.decide(argv)
        key = " ".join(argv[:2])
        if key in self.exit_codes:
            return self.exit_codes[key]
        return self.exit_codes.get(argv[0], 0)


@pytest.fixture(autouse=True)
def reset_logging():
    """CLI runs bind structlog to a captured stream; undo that after each test."""
    yield
    structlog.reset_defaults()


@pytest.fixture
def fake_env() -> FakeEnvironment:
    return FakeEnvironment()


@pytest.fixture
def strict_checks() -> list[Check]:
    """cargo fmt / clippy / test with the strict profile."""
    return build_checks(CARGO, get_profile("strict"))


@pytest.fixture
def make_env() -> type[FakeEnvironment]:
    """The FakeEnvironment class, for tests that need custom exit codes."""
    return FakeEnvironment
