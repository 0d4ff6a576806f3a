"""Tests for the pushgate CLI."""

import json
from pathlib import Path

import pytest
import yaml
from click.testing import CliRunner

from pushgate.cli import main


@pytest.fixture
def runner() -> CliRunner:
    return CliRunner()


@pytest.fixture
def config_path(tmp_path: Path) -> Path:
    path = tmp_path / ".pushgate" / "config.yaml"
    path.parent.mkdir()
    path.write_text(yaml.dump({"toolchain": "cargo", "profile": "strict"}))
    return path


class TestRun:
    def test_no_subcommand_runs_gate(self, runner, config_path, fake_env) -> None:
        result = runner.invoke(main, ["-c", str(config_path)], obj={"environment": fake_env})

        assert result.exit_code == 0
        assert len(fake_env.calls) == 3

    def test_exit_code_propagates(self, runner, config_path, make_env) -> None:
        env = make_env({"cargo clippy": 101})

        result = runner.invoke(main, ["-c", str(config_path), "run"], obj={"environment": env})

        assert result.exit_code == 101
        assert len(env.calls) == 2

    def test_profile_and_suppress(self, runner, config_path, fake_env) -> None:
        result = runner.invoke(
            main,
            ["-c", str(config_path), "run", "--profile", "relaxed", "--suppress", "unused_imports"],
            obj={"environment": fake_env},
        )

        assert result.exit_code == 0
        assert fake_env.calls[1] == [
            "cargo", "clippy", "--", "-Dwarnings", "-Adead_code", "-Aunused_imports",
        ]

    def test_timeout(self, runner, config_path, fake_env) -> None:
        result = runner.invoke(
            main, ["-c", str(config_path), "run", "--timeout", "30"], obj={"environment": fake_env}
        )

        assert result.exit_code == 0
        assert fake_env.timeouts == [30.0, 30.0, 30.0]

    def test_summary(self, runner, config_path, make_env) -> None:
        env = make_env({"cargo fmt": 1})

        result = runner.invoke(
            main, ["-c", str(config_path), "run", "--summary"], obj={"environment": env}
        )

        assert result.exit_code == 1
        assert "skipped" in result.output

    def test_config_from_env_var(self, runner, config_path, fake_env) -> None:
        result = runner.invoke(
            main, ["run"], obj={"environment": fake_env}, env={"PUSHGATE_CONFIG": str(config_path)}
        )

        assert result.exit_code == 0

    def test_invalid_config(self, runner, tmp_path: Path, fake_env) -> None:
        bad = tmp_path / "config.yaml"
        bad.write_text("toolchain: make\n")

        result = runner.invoke(main, ["-c", str(bad), "run"], obj={"environment": fake_env})

        assert result.exit_code == 1
        assert "Unknown toolchain" in result.output
        assert fake_env.calls == []


class TestOtherCommands:
    def test_list_json(self, runner, config_path) -> None:
        result = runner.invoke(main, ["-c", str(config_path), "list", "--json"])

        assert result.exit_code == 0
        checks = json.loads(result.output)
        assert [c["name"] for c in checks] == ["format", "lint", "test"]
        assert checks[1]["arguments"] == ["clippy", "--", "-Dwarnings", "-Dclippy::unwrap_used"]

    def test_list_table(self, runner, config_path) -> None:
        result = runner.invoke(main, ["-c", str(config_path), "list"])

        assert result.exit_code == 0
        assert "cargo fmt --check" in result.output

    def test_doctor_missing(self, runner, config_path, make_env) -> None:
        env = make_env(missing={"cargo"})

        result = runner.invoke(main, ["-c", str(config_path), "doctor"], obj={"environment": env})

        assert result.exit_code == 1
        assert "Missing: cargo" in result.output

    def test_doctor_ok(self, runner, config_path, fake_env) -> None:
        result = runner.invoke(main, ["-c", str(config_path), "doctor"], obj={"environment": fake_env})

        assert result.exit_code == 0
        assert fake_env.calls == []

    def test_env_json(self, runner, tmp_path: Path) -> None:
        path = tmp_path / "config.yaml"
        path.write_text(yaml.dump({"environment": {"library_paths": ["/a/lib", "/b/lib"]}}))

        result = runner.invoke(
            main, ["-c", str(path), "env", "--json"], env={"LD_LIBRARY_PATH": ""}
        )

        assert result.exit_code == 0
        assert json.loads(result.output) == {"LD_LIBRARY_PATH": "/a/lib:/b/lib"}

    def test_init_and_install_hook(self, runner, tmp_path: Path) -> None:
        (tmp_path / ".git").mkdir()
        config_path = tmp_path / ".pushgate" / "config.yaml"

        result = runner.invoke(main, ["-c", str(config_path), "init"])
        assert result.exit_code == 0
        assert config_path.exists()

        result = runner.invoke(main, ["-c", str(config_path), "install-hook"])
        assert result.exit_code == 0
        hook = (tmp_path / ".git" / "hooks" / "pre-push").read_text()
        assert str(config_path) in hook

    def test_install_hook_outside_repo(self, runner, tmp_path: Path) -> None:
        config_path = tmp_path / ".pushgate" / "config.yaml"

        result = runner.invoke(main, ["-c", str(config_path), "install-hook"])

        assert result.exit_code == 1
        assert "not a git repository" in result.output


class TestExplicitChecks:
    @pytest.fixture
    def explicit_config(self, tmp_path: Path) -> Path:
        path = tmp_path / "config.yaml"
        path.write_text(yaml.dump({"checks": [{"name": "lint", "command": "golint"}]}))
        return path

    def test_runs_explicit_checks(self, runner, explicit_config, fake_env) -> None:
        result = runner.invoke(main, ["-c", str(explicit_config), "run"], obj={"environment": fake_env})

        assert result.exit_code == 0
        assert fake_env.calls == [["golint"]]

    @pytest.mark.parametrize(
        "args",
        [["--suppress", "dead_code"], ["--profile", "relaxed"]],
    )
    def test_lint_options_rejected(self, runner, explicit_config, fake_env, args) -> None:
        result = runner.invoke(
            main, ["-c", str(explicit_config), "run", *args], obj={"environment": fake_env}
        )

        assert result.exit_code == 2
        assert "explicit checks list" in result.output
        assert fake_env.calls == []
