"""Thrift build task: generate C# from .thrift files and compile a library.

Skips all work when the marker left by the previous successful build shows
the outputs are still current.

Contract:
- Inputs: BuildRequest, BuildSettings, CommandRunner, MessageSink
- Outputs: BuildResult (failures are results, not exceptions)
- Side Effects: Runs the generator and compiler, rewrites the generated
  source tree, writes the marker file after a successful build

Example:
    >>> from thriftbuild.config import BuildSettings
    >>> from thriftbuild.execution import SubprocessRunner
    >>> request = BuildRequest(
    ...     thrift_executable="/usr/bin/thrift",
    ...     thrift_library="lib/Thrift.dll",
    ...     definition_dir="idl",
    ...     output_name="ThriftImpl.dll",
    ... )
    >>> result = ThriftBuild(request, BuildSettings(), SubprocessRunner()).execute()
    >>> if result.success:
    ...     print(result.output_path)
"""

from __future__ import annotations

import logging
from pathlib import Path

from thriftbuild.cache import MarkerStore
from thriftbuild.cache import artifact_ticks
from thriftbuild.cache import decide
from thriftbuild.cache import latest_source_ticks
from thriftbuild.config import BuildSettings
from thriftbuild.execution import CommandRunner
from thriftbuild.execution import LibraryCompiler
from thriftbuild.execution import SubprocessRunner
from thriftbuild.execution import ThriftGenerator
from thriftbuild.models import BuildRequest
from thriftbuild.models import BuildResult
from thriftbuild.models import StalenessDecision
from thriftbuild.reporting import MessageSink
from thriftbuild.storage import delete_generated_dir
from thriftbuild.storage import find_definition_files
from thriftbuild.storage import find_generated_sources
from thriftbuild.storage import generated_dir

logger = logging.getLogger(__name__)


class ThriftBuild:
    """Build task turning a directory of .thrift files into a compiled library.

    Each call to execute() is independent; the marker file is the only state
    carried between invocations. Concurrent invocations on the same
    definition directory are not supported.
    """

    def __init__(
        self,
        request: BuildRequest,
        settings: BuildSettings | None = None,
        runner: CommandRunner | None = None,
        sink: MessageSink | None = None,
    ) -> None:
        """Initialize build task.

        Args:
            request: Paths for this invocation
            settings: Build settings (default: BuildSettings())
            runner: Command runner (default: SubprocessRunner with configured timeout)
            sink: Message sink (default: module logger)
        """
        self.request = request
        self.settings = settings or BuildSettings()
        self.runner = runner or SubprocessRunner(timeout_seconds=self.settings.timeout_seconds)
        self.sink = sink or logger
        self.markers = MarkerStore(request.definition_dir, self.settings.marker_name)

    def check(self) -> StalenessDecision:
        """Evaluate the staleness oracle for the current state on disk.

        The library timestamp is only read when a marker exists.
        """
        source_latest = latest_source_ticks(self.request.definition_dir, self.settings.definition_suffix)
        recorded = self.markers.read()
        artifact_time = artifact_ticks(self.request.thrift_library) if recorded is not None else "0"
        return decide(artifact_time, source_latest, recorded, mode=self.settings.timestamp_comparison)

    def execute(self) -> BuildResult:
        """Run the task.

        Returns:
            BuildResult describing success, skip or the failing step
        """
        request = self.request
        if not request.definition_dir.is_dir():
            message = f"Thrift definition directory does not exist: {request.definition_dir}"
            self.sink.error(message)
            return BuildResult.failure("definition-directory", message)

        decision = self.check()

        if decision.skip:
            self.sink.info("ThriftImpl up-to-date")
            return BuildResult(success=True, skipped=True, output_path=request.output_path, message="up-to-date")

        self.sink.debug(f"Rebuild required: {decision.reason}")

        output_dir = request.output_dir
        if not output_dir.is_dir():
            message = f"Thrift library directory does not exist: {output_dir}"
            self.sink.error(message)
            return BuildResult.failure("output-directory", message)

        language = self.settings.generator_language
        delete_generated_dir(output_dir, language, sink=self.sink)

        self.sink.info(f"Generating code from {request.definition_dir}")
        generated = self._generate(output_dir)
        if isinstance(generated, BuildResult):
            return generated

        sources = find_generated_sources(
            generated_dir(output_dir, language),
            self.settings.source_suffix,
            extra=request.assembly_info,
        )
        compiler = LibraryCompiler(
            self.runner,
            executable=self.settings.compiler_executable,
            emit_debug_information=self.settings.emit_debug_information,
            sink=self.sink,
        )
        self.sink.info(f"Compiling {len(sources)} generated sources...")
        result = compiler.compile(sources, request.thrift_library, request.output_path)
        if not result.ok:
            message = f"Compilation of {request.output_name} failed: {result.describe_failure()}"
            self.sink.error(message)
            return BuildResult.failure("compile", message, generated)

        if self.settings.clean_after_build:
            delete_generated_dir(output_dir, language, sink=self.sink)

        try:
            self.markers.write(decision.basis)
        except RuntimeError as e:
            self.sink.error(str(e))
            return BuildResult.failure("marker", str(e), generated)

        self.sink.info(f"Built {request.output_path}")
        return BuildResult(
            success=True,
            output_path=request.output_path,
            message="built",
            generated_files=generated,
            marker=decision.basis,
        )

    def _generate(self, output_dir: Path) -> list[Path] | BuildResult:
        """Run the generator over every definition file, stopping at the first failure."""
        generator = ThriftGenerator(
            self.request.thrift_executable,
            self.runner,
            language=self.settings.generator_language,
            sink=self.sink,
        )
        done: list[Path] = []
        for definition in find_definition_files(self.request.definition_dir, self.settings.definition_suffix):
            self.sink.info(f"Generating code for: {definition}")
            result = generator.generate(definition, output_dir)
            if not result.ok:
                message = f"thrift failed to compile {definition}: {result.describe_failure()}"
                self.sink.error(message)
                return BuildResult.failure("generate", message, done)
            done.append(definition)
        return done


def run_build(
    request: BuildRequest,
    settings: BuildSettings | None = None,
    runner: CommandRunner | None = None,
    sink: MessageSink | None = None,
) -> BuildResult:
    """Convenience wrapper around ThriftBuild(...).execute()."""
    return ThriftBuild(request, settings=settings, runner=runner, sink=sink).execute()
