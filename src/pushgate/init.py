"""
Initialization - Sets up pushgate in a repository.

Creates:
- .pushgate/ directory
- Default config.yaml
"""

from __future__ import annotations

from pathlib import Path

import yaml
from rich.console import Console

console = Console(stderr=True)


def initialize(config_path: Path) -> bool:
    """
    Write the default configuration unless one already exists.

    Returns True when a new file was written.
    """
    if config_path.is_dir():
        config_path = config_path / ".pushgate" / "config.yaml"

    config_path.parent.mkdir(parents=True, exist_ok=True)

    if config_path.exists():
        console.print(f"  Keeping existing [cyan]{config_path}[/cyan]")
        return False

    with open(config_path, "w") as f:
        yaml.dump(_create_default_config(), f, default_flow_style=False, sort_keys=False)
    console.print(f"  Created [cyan]{config_path}[/cyan]")
    console.print("[dim]Run:[/dim] pushgate install-hook")
    return True


def _create_default_config() -> dict:
    """Create the default configuration dictionary."""
    return {
        "toolchain": "cargo",
        # strict: -Dwarnings -Dclippy::unwrap_used
        # relaxed: -Dwarnings -Adead_code
        "profile": "strict",
        "lint": {
            "suppressions": [],
        },
        "timeout_seconds": None,
        "environment": {
            "native_build_inputs": [
                "rustup",
                "rust-analyzer",
                "rustPlatform.bindgenHook",
                "gdb",
                "python3",
                "ncurses",
            ],
            "build_inputs": [
                "fontconfig",
                "gdk-pixbuf",
                "cairo",
                "gtk3",
                "webkitgtk",
                "wayland",
                "libxkbcommon",
            ],
            "tools": ["cargo", "rustfmt", "cargo-clippy"],
            "library_paths": [],
            "variables": {},
        },
    }
