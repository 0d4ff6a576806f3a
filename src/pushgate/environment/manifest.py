"""
Environment manifest - declarative description of the provisioned toolchain.

The manifest lists what the development shell provides (build tools, runtime
libraries) and where shared libraries live. It is data only: the gate runner
never reads it. It feeds the subprocess environment and the doctor command.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Mapping

from pushgate.errors import ConfigError

LIBRARY_PATH_VAR = "LD_LIBRARY_PATH"


def _string_list(value: Any, key: str) -> list[str]:
    if value is None:
        return []
    if isinstance(value, str):
        return [value]
    if isinstance(value, list):
        return [str(item) for item in value]
    raise ConfigError(f"environment.{key} must be a list of strings")


@dataclass
class EnvironmentManifest:
    """Tools, libraries and variables the execution environment provides."""

    native_build_inputs: list[str] = field(default_factory=list)
    build_inputs: list[str] = field(default_factory=list)
    tools: list[str] = field(default_factory=list)  # executables expected on PATH
    library_paths: list[str] = field(default_factory=list)
    variables: dict[str, str] = field(default_factory=dict)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any] | None) -> EnvironmentManifest:
        if data is not None and not isinstance(data, Mapping):
            raise ConfigError("environment must be a mapping")
        data = dict(data or {})
        variables = data.get("variables") or {}
        if not isinstance(variables, dict):
            raise ConfigError("environment.variables must be a mapping")

        return cls(
            native_build_inputs=_string_list(data.get("native_build_inputs"), "native_build_inputs"),
            build_inputs=_string_list(data.get("build_inputs"), "build_inputs"),
            tools=_string_list(data.get("tools"), "tools"),
            library_paths=_string_list(data.get("library_paths"), "library_paths"),
            variables={str(k): str(v) for k, v in variables.items()},
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "native_build_inputs": list(self.native_build_inputs),
            "build_inputs": list(self.build_inputs),
            "tools": list(self.tools),
            "library_paths": list(self.library_paths),
            "variables": dict(self.variables),
        }

    def ld_library_path(self) -> str:
        """Join library directories in declaration order, without duplicates."""
        seen: list[str] = []
        for path in self.library_paths:
            if path and path not in seen:
                seen.append(path)
        return ":".join(seen)

    def variables_for(self, parent: Mapping[str, str]) -> dict[str, str]:
        """
        Variables to overlay on a parent environment.

        Manifest library paths are prepended to any inherited LD_LIBRARY_PATH.
        An explicit LD_LIBRARY_PATH in `variables` wins outright.
        """
        result = dict(self.variables)
        if LIBRARY_PATH_VAR in result:
            return result

        library_path = self.ld_library_path()
        if library_path:
            inherited = parent.get(LIBRARY_PATH_VAR, "")
            result[LIBRARY_PATH_VAR] = f"{library_path}:{inherited}" if inherited else library_path

        return result
