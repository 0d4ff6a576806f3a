"""Tests for the environment doctor."""

from pushgate.environment.doctor import diagnose
from pushgate.environment.manifest import EnvironmentManifest


def test_diagnose_dedups_and_reports_missing(make_env, strict_checks) -> None:
    env = make_env(missing={"cargo-clippy"})
    manifest = EnvironmentManifest(tools=["cargo", "cargo-clippy", "gdb"])

    statuses = diagnose(strict_checks, manifest, env)

    assert [s.command for s in statuses] == ["cargo", "cargo-clippy", "gdb"]
    assert statuses[0].required_by == "check:format"
    assert statuses[0].found
    assert not statuses[1].found
    assert statuses[2].path == "/usr/bin/gdb"


def test_diagnose_never_executes(fake_env, strict_checks) -> None:
    diagnose(strict_checks, EnvironmentManifest(), fake_env)

    assert fake_env.calls == []
