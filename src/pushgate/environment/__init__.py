"""
Environment - The provisioned toolchain the checks run in.

Modules:
    manifest    - Declarative list of tools, libraries and variables
    execution   - ExecutionEnvironment protocol and subprocess implementation
    doctor      - Verify that required commands resolve
"""

from pushgate.environment.execution import ExecutionEnvironment, SubprocessEnvironment
from pushgate.environment.manifest import EnvironmentManifest

__all__ = ["EnvironmentManifest", "ExecutionEnvironment", "SubprocessEnvironment"]
