"""
Hooks - Install the gate as a git hook.
"""

from __future__ import annotations

import shlex
import stat
from pathlib import Path

import structlog

from pushgate.errors import HookError

logger = structlog.get_logger()

SUPPORTED_HOOKS = ("pre-push", "pre-commit")
HOOK_MARKER = "# installed by pushgate"


def render_hook(config_path: Path | None = None) -> str:
    """Shell script body for a hook that runs the gate."""
    command = "pushgate"
    if config_path is not None:
        command += f" --config {shlex.quote(str(config_path))}"
    return f"#!/bin/sh\n{HOOK_MARKER}\nexec {command} run\n"


def install_hook(
    repo_root: Path,
    hook: str = "pre-push",
    force: bool = False,
    config_path: Path | None = None,
) -> Path:
    """
    Write a git hook that runs the gate and make it executable.

    A hook not written by pushgate is only replaced when force is set.
    """
    if hook not in SUPPORTED_HOOKS:
        raise HookError(f"Unsupported hook '{hook}' (supported: {', '.join(SUPPORTED_HOOKS)})")

    git_dir = repo_root / ".git"
    if not git_dir.is_dir():
        raise HookError(f"{repo_root} is not a git repository (.git missing)")

    hooks_dir = git_dir / "hooks"
    hooks_dir.mkdir(exist_ok=True)
    hook_path = hooks_dir / hook

    if hook_path.exists() and not force:
        if HOOK_MARKER not in hook_path.read_text(errors="replace"):
            raise HookError(f"{hook_path} already exists; use --force to replace it")

    hook_path.write_text(render_hook(config_path))
    mode = hook_path.stat().st_mode
    hook_path.chmod(mode | stat.S_IXUSR | stat.S_IXGRP | stat.S_IXOTH)

    logger.info("Installed hook", hook=hook, path=str(hook_path))
    return hook_path
