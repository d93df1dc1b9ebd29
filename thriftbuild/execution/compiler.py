"""Compilation of generated sources into a library.

Uses csc-style switches, which the Roslyn ``csc`` and Mono ``mcs`` compilers
both accept.
"""

import logging
from pathlib import Path

from thriftbuild.reporting import MessageSink

from .runner import CommandResult
from .runner import CommandRunner

logger = logging.getLogger(__name__)


class LibraryCompiler:
    """Compiles all generated sources in a single invocation."""

    def __init__(
        self,
        runner: CommandRunner,
        executable: str = "csc",
        emit_debug_information: bool = True,
        sink: MessageSink | None = None,
    ) -> None:
        self.runner = runner
        self.executable = executable
        self.emit_debug_information = emit_debug_information
        self.sink = sink or logger

    def build_command(self, sources: list[Path], reference: Path, output_path: Path) -> list[str]:
        """Argument vector for the compiler.

        Args:
            sources: Source files to compile
            reference: Library referenced by the generated code
            output_path: Library to produce

        Returns:
            Command line as a list
        """
        command = [self.executable, "/nologo", "/target:library"]
        if self.emit_debug_information:
            command.append("/debug+")
        command.append(f"/reference:{reference}")
        command.append(f"/out:{output_path}")
        command.extend(str(s) for s in sources)
        return command

    def compile(self, sources: list[Path], reference: Path, output_path: Path) -> CommandResult:
        """Compile sources into ``output_path``."""
        result = self.runner.run(self.build_command(sources, reference, output_path), cwd=output_path.parent)
        if result.stdout.strip():
            # csc reports diagnostics on stdout
            log = self.sink.debug if result.ok else self.sink.error
            log(result.stdout.rstrip())
        if not result.ok and result.stderr.strip():
            self.sink.error(result.stderr.rstrip())
        return result
