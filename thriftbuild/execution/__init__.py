"""External tool execution for thriftbuild.

Contract:
- Inputs: Executable paths, definition files, generated sources
- Outputs: CommandResult objects
- Side Effects: Spawns the Thrift generator and the C# compiler
"""

from .compiler import LibraryCompiler
from .generator import ThriftGenerator
from .runner import CommandResult
from .runner import CommandRunner
from .runner import SubprocessRunner

__all__ = [
    "CommandResult",
    "CommandRunner",
    "LibraryCompiler",
    "SubprocessRunner",
    "ThriftGenerator",
]
