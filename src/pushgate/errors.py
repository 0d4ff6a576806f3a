"""
Errors raised by pushgate.
"""

from __future__ import annotations


class PushgateError(Exception):
    """Base class for pushgate errors."""


class ConfigError(PushgateError):
    """Configuration file or value is invalid."""


class HookError(PushgateError):
    """A version-control hook could not be installed."""


class CheckFailed(PushgateError):
    """A check exited non-zero and aborted the gate."""

    def __init__(self, name: str, exit_code: int) -> None:
        super().__init__(f"Check '{name}' failed with exit code {exit_code}")
        self.name = name
        self.exit_code = exit_code
