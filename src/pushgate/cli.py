"""
pushgate CLI - Main entry point.

Commands:
    run           Run the quality gate (default when no command is given)
    list          Show the configured checks
    doctor        Verify required commands resolve
    env           Show the environment variables checks run with
    init          Write a default config file
    install-hook  Install the gate as a git hook
"""

from __future__ import annotations

import dataclasses
import json
import os
from pathlib import Path

import click
from rich.console import Console
from rich.table import Table

from pushgate import __version__
from pushgate.config import CONFIG_ENV_VAR, DEFAULT_CONFIG_PATH, GateConfig
from pushgate.errors import ConfigError, HookError
from pushgate.gates.factory import PROFILE_NAMES
from pushgate.gates.models import CheckStatus, GateResult
from pushgate.observability import configure_logging

console = Console(stderr=True)

STATUS_STYLES = {
    CheckStatus.PASSED: "green",
    CheckStatus.FAILED: "red bold",
    CheckStatus.SKIPPED: "dim",
    CheckStatus.PENDING: "",
}


def _load_config(ctx: click.Context) -> GateConfig:
    try:
        return GateConfig.load(ctx.obj["config_path"])
    except ConfigError as e:
        raise click.ClickException(str(e)) from e


def _environment(ctx: click.Context, config: GateConfig):
    """Injected environment (tests) or a subprocess environment from the manifest."""
    environment = ctx.obj.get("environment")
    if environment is not None:
        return environment

    from pushgate.environment.execution import SubprocessEnvironment

    return SubprocessEnvironment.from_manifest(config.environment, cwd=config.repo_root)


@click.group(invoke_without_command=True)
@click.version_option(version=__version__)
@click.option(
    "--config",
    "-c",
    type=click.Path(path_type=Path),
    envvar=CONFIG_ENV_VAR,
    help="Path to config file (default: .pushgate/config.yaml)",
)
@click.option("--verbose", "-v", is_flag=True, help="Debug logging")
@click.pass_context
def main(ctx: click.Context, config: Path | None, verbose: bool) -> None:
    """pushgate - Fail-fast format, lint and test gate for git hooks"""
    ctx.ensure_object(dict)
    ctx.obj["config_path"] = config or DEFAULT_CONFIG_PATH
    ctx.obj["config_explicit"] = config is not None
    configure_logging(verbose)

    if ctx.invoked_subcommand is None:
        ctx.invoke(run)


@main.command()
@click.option("--profile", type=click.Choice(PROFILE_NAMES), help="Lint profile override")
@click.option("--suppress", "suppress", multiple=True, metavar="RULE", help="Suppress a lint rule")
@click.option("--timeout", type=float, help="Per-check timeout in seconds (default: none)")
@click.option("--summary", is_flag=True, help="Print a result table after the run")
@click.pass_context
def run(
    ctx: click.Context,
    profile: str | None,
    suppress: tuple[str, ...],
    timeout: float | None,
    summary: bool,
) -> None:
    """Run the quality gate."""
    from pushgate.gates.runner import GateRunner

    config = _load_config(ctx)
    if config.checks and (profile or suppress):
        raise click.UsageError("--profile and --suppress do not apply to an explicit checks list")
    if profile:
        config.profile = profile
    if suppress:
        config.suppressions = config.suppressions | frozenset(suppress)
    if timeout is not None:
        if timeout <= 0:
            raise click.BadParameter("must be positive", param_hint="--timeout")
        config.timeout_seconds = timeout
        config.checks = [dataclasses.replace(c, timeout_seconds=timeout) for c in config.checks]

    try:
        checks = config.build_checks()
    except ConfigError as e:
        raise click.ClickException(str(e)) from e

    result = GateRunner(_environment(ctx, config)).run(checks)

    if summary:
        _print_summary(result)

    ctx.exit(result.exit_code)


def _print_summary(result: GateResult) -> None:
    table = Table(title="Quality Gate")
    table.add_column("Check", style="cyan")
    table.add_column("Status")
    table.add_column("Exit", justify="right")
    table.add_column("Duration", justify="right")

    for outcome in result.executed:
        table.add_row(
            outcome.name,
            outcome.status.value,
            "" if outcome.exit_code is None else str(outcome.exit_code),
            "" if outcome.duration_ms is None else f"{outcome.duration_ms}ms",
            style=STATUS_STYLES[outcome.status],
        )

    console.print(table)


@main.command(name="list")
@click.option("--json", "as_json", is_flag=True, help="JSON output")
@click.pass_context
def list_checks(ctx: click.Context, as_json: bool) -> None:
    """Show the configured checks in run order."""
    config = _load_config(ctx)
    try:
        checks = config.build_checks()
    except ConfigError as e:
        raise click.ClickException(str(e)) from e

    if as_json:
        click.echo(json.dumps([c.to_dict() for c in checks], indent=2))
        return

    table = Table(title=f"Checks ({config.toolchain}, {config.profile})")
    table.add_column("#", justify="right")
    table.add_column("Name", style="cyan")
    table.add_column("Command")

    for index, check in enumerate(checks, start=1):
        table.add_row(str(index), check.name, " ".join(check.argv))

    Console().print(table)


@main.command()
@click.pass_context
def doctor(ctx: click.Context) -> None:
    """Verify that every required command resolves."""
    from pushgate.environment.doctor import diagnose

    config = _load_config(ctx)
    statuses = diagnose(config.build_checks(), config.environment, _environment(ctx, config))

    table = Table(title="Environment")
    table.add_column("Command", style="cyan")
    table.add_column("Required By")
    table.add_column("Path")

    for status in statuses:
        path = status.path if status.found else "[red]not found[/red]"
        table.add_row(status.command, status.required_by, path)

    console.print(table)

    missing = [s.command for s in statuses if not s.found]
    if missing:
        console.print(f"[red]✗[/red] Missing: {', '.join(missing)}")
        ctx.exit(1)
    console.print("[green]✓[/green] All commands found")


@main.command()
@click.option("--json", "as_json", is_flag=True, help="JSON output")
@click.pass_context
def env(ctx: click.Context, as_json: bool) -> None:
    """Show variables the checks run with, on top of the inherited environment."""
    config = _load_config(ctx)
    variables = config.environment.variables_for(os.environ)

    if as_json:
        click.echo(json.dumps(variables, indent=2, sort_keys=True))
        return

    for key, value in sorted(variables.items()):
        click.echo(f"{key}={value}")


@main.command()
@click.pass_context
def init(ctx: click.Context) -> None:
    """Write a default config file."""
    from pushgate.init import initialize

    if initialize(ctx.obj["config_path"]):
        console.print("[green]✓[/green] pushgate initialized")


@main.command(name="install-hook")
@click.option(
    "--hook",
    type=click.Choice(["pre-push", "pre-commit"]),
    default="pre-push",
    show_default=True,
    help="Which git hook to install",
)
@click.option("--force", is_flag=True, help="Replace an existing hook")
@click.pass_context
def install_hook(ctx: click.Context, hook: str, force: bool) -> None:
    """Install the gate as a git hook."""
    from pushgate.hooks import install_hook as _install_hook

    config = _load_config(ctx)
    config_path = ctx.obj["config_path"] if ctx.obj["config_explicit"] else None

    try:
        hook_path = _install_hook(config.repo_root, hook=hook, force=force, config_path=config_path)
    except HookError as e:
        raise click.ClickException(str(e)) from e

    console.print(f"[green]✓[/green] Installed {hook} hook at {hook_path}")


if __name__ == "__main__":
    main()
