"""Thrift code generator invocation."""

import logging
from pathlib import Path

from thriftbuild.reporting import MessageSink

from .runner import CommandResult
from .runner import CommandRunner

logger = logging.getLogger(__name__)


class ThriftGenerator:
    """Runs the Thrift compiler once per definition file."""

    def __init__(
        self,
        executable: Path,
        runner: CommandRunner,
        language: str = "csharp",
        sink: MessageSink | None = None,
    ) -> None:
        self.executable = Path(executable)
        self.runner = runner
        self.language = language
        self.sink = sink or logger

    def build_command(self, definition_file: Path, output_dir: Path) -> list[str]:
        """Argument vector for one definition file.

        Example:
            >>> gen = ThriftGenerator(Path("thrift"), runner=None)
            >>> gen.build_command(Path("a.thrift"), Path("out"))
            ['thrift', '--gen', 'csharp', '-o', 'out', '-r', 'a.thrift']
        """
        return [
            str(self.executable),
            "--gen",
            self.language,
            "-o",
            str(output_dir),
            "-r",
            str(definition_file),
        ]

    def generate(self, definition_file: Path, output_dir: Path) -> CommandResult:
        """Generate sources for a single definition file.

        Args:
            definition_file: .thrift file to process
            output_dir: Directory receiving the gen-<language> tree

        Returns:
            Result of the generator process
        """
        result = self.runner.run(self.build_command(definition_file, output_dir))
        if result.stdout.strip():
            self.sink.debug(result.stdout.rstrip())
        if not result.ok and result.stderr.strip():
            self.sink.error(result.stderr.rstrip())
        return result
