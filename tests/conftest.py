"""
Shared pytest fixtures for the thriftbuild test suite.

Provides fixtures for:
- A Thrift project on disk with controlled timestamps
- A fake command runner standing in for thrift and csc
- Default build settings
"""

import os
from collections.abc import Generator
from dataclasses import dataclass
from pathlib import Path

import pytest

from thriftbuild.config import BuildSettings
from thriftbuild.execution import CommandResult
from thriftbuild.models import BuildRequest

# 2024-01-01T00:00:00Z in nanoseconds
BASE_NS = 1_704_067_200_000_000_000
SECOND_NS = 1_000_000_000


def set_mtime(path: Path, mtime_ns: int) -> None:
    """Set both access and modification time of a path."""
    os.utime(path, ns=(mtime_ns, mtime_ns))


class FakeRunner:
    """CommandRunner that imitates the thrift generator and the C# compiler.

    The generator writes one source per definition under gen-<language>/;
    the compiler writes the /out: file. Failures are configured per file.
    """

    def __init__(self, compiler: str = "csc") -> None:
        self.compiler = compiler
        self.commands: list[list[str]] = []
        self.fail_definitions: set[str] = set()
        self.compile_fails = False
        self.missing_executables: set[str] = set()

    @property
    def generator_calls(self) -> list[list[str]]:
        return [c for c in self.commands if "--gen" in c]

    @property
    def compiler_calls(self) -> list[list[str]]:
        return [c for c in self.commands if c[0] == self.compiler]

    def run(self, command: list[str], *, cwd: Path | None = None) -> CommandResult:
        command = [str(c) for c in command]
        self.commands.append(command)

        if command[0] in self.missing_executables:
            return CommandResult(command=command, exit_code=None, error=f"failed to start {command[0]}")

        if "--gen" in command:
            language = command[command.index("--gen") + 1]
            out_dir = Path(command[command.index("-o") + 1])
            definition = Path(command[-1])
            if definition.name in self.fail_definitions:
                return CommandResult(command=command, exit_code=1, stderr=f"[ERROR] parse error in {definition.name}")
            target = out_dir / f"gen-{language}" / definition.stem / f"{definition.stem.title()}.cs"
            target.parent.mkdir(parents=True, exist_ok=True)
            target.write_text(f"// generated from {definition.name}\n", encoding="utf-8")
            return CommandResult(command=command, exit_code=0)

        if command[0] == self.compiler:
            if self.compile_fails:
                return CommandResult(command=command, exit_code=1, stdout="error CS1002: ; expected")
            out = next(c for c in command if c.startswith("/out:"))[len("/out:") :]
            Path(out).write_bytes(b"MZ")
            return CommandResult(command=command, exit_code=0)

        return CommandResult(command=command, exit_code=127, stderr="unknown command")


@dataclass
class ThriftProject:
    """Paths of a test project."""

    root: Path
    definition_dir: Path
    library: Path
    thrift_executable: Path

    base_ns = BASE_NS
    second_ns = SECOND_NS
    set_mtime = staticmethod(set_mtime)

    @property
    def output_dir(self) -> Path:
        return self.library.parent

    @property
    def marker(self) -> Path:
        return self.definition_dir / "LAST_COMP_TIMESTAMP"

    def request(self, output_name: str = "ThriftImpl.dll", assembly_info: Path | None = None) -> BuildRequest:
        return BuildRequest(
            thrift_executable=self.thrift_executable,
            thrift_library=self.library,
            definition_dir=self.definition_dir,
            output_name=output_name,
            assembly_info=assembly_info,
        )

    def touch_definition(self, name: str, mtime_ns: int) -> Path:
        """Create or modify a definition without changing the directory time."""
        dir_mtime = self.definition_dir.stat().st_mtime_ns
        path = self.definition_dir / name
        path.write_text(f"service {Path(name).stem.title()} {{}}\n", encoding="utf-8")
        set_mtime(path, mtime_ns)
        set_mtime(self.definition_dir, dir_mtime)
        return path


@pytest.fixture
def thrift_project(tmp_path: Path) -> ThriftProject:
    """Project with three definitions, all newer than the runtime library.

    Timestamps: library at BASE, definitions at BASE+10s..BASE+30s,
    definition directory at BASE+5s.
    """
    definition_dir = tmp_path / "idl"
    definition_dir.mkdir()
    lib_dir = tmp_path / "lib"
    lib_dir.mkdir()

    library = lib_dir / "Thrift.dll"
    library.write_bytes(b"MZ")
    set_mtime(library, BASE_NS)

    thrift = tmp_path / "bin" / "thrift"
    thrift.parent.mkdir()
    thrift.write_text("#!/bin/sh\n", encoding="utf-8")

    for i, name in enumerate(["calculator.thrift", "shared.thrift", "tutorial.thrift"], start=1):
        path = definition_dir / name
        path.write_text(f"service S{i} {{}}\n", encoding="utf-8")
        set_mtime(path, BASE_NS + i * 10 * SECOND_NS)
    set_mtime(definition_dir, BASE_NS + 5 * SECOND_NS)

    return ThriftProject(root=tmp_path, definition_dir=definition_dir, library=library, thrift_executable=thrift)


@pytest.fixture
def fake_runner() -> FakeRunner:
    return FakeRunner()


@pytest.fixture
def settings() -> BuildSettings:
    """Settings with no config file and no environment influence."""
    return BuildSettings(_env_file=None)


@pytest.fixture
def clean_env(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> Generator[Path, None, None]:
    """Remove THRIFTBUILD_* variables and run from an empty directory."""
    for key in list(os.environ):
        if key.startswith("THRIFTBUILD_"):
            monkeypatch.delenv(key, raising=False)
    workdir = tmp_path / "work"
    workdir.mkdir()
    monkeypatch.chdir(workdir)
    yield workdir
