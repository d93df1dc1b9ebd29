"""Thrift build integration.

Generates C# from .thrift definitions with the Thrift compiler, compiles the
result into a library, and skips the work when the previous build is still
current.

Public Interface:
    Modules:
    - cache: Staleness oracle, timestamps, marker file
    - config: Settings loading
    - execution: Generator and compiler invocation
    - storage: Definition and source discovery, cleanup
    - task: The build task
"""

from .models import BuildRequest
from .models import BuildResult
from .task import ThriftBuild
from .task import run_build

__version__ = "0.1.0"

__all__ = [
    "BuildRequest",
    "BuildResult",
    "ThriftBuild",
    "run_build",
]
