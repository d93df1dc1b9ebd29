"""Blocking execution of external commands.

The build task never spawns processes directly; it receives a CommandRunner.
Tests substitute a fake runner, production uses SubprocessRunner.

Contract:
- Inputs: Argument vector, optional working directory
- Outputs: CommandResult (never raises for process failures)
- Side Effects: Spawns a child process and waits for it to exit
"""

from __future__ import annotations

import logging
import shlex
import subprocess
from dataclasses import dataclass
from pathlib import Path
from typing import Protocol

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CommandResult:
    """Outcome of one external command.

    Attributes:
        command: Argument vector that was run
        exit_code: Process exit code, None if the process never ran or timed out
        stdout: Captured standard output
        stderr: Captured standard error
        timed_out: True when the timeout expired
        error: Launch error (e.g. executable not found)
    """

    command: list[str]
    exit_code: int | None
    stdout: str = ""
    stderr: str = ""
    timed_out: bool = False
    error: str | None = None

    @property
    def ok(self) -> bool:
        return not self.timed_out and self.error is None and self.exit_code == 0

    def describe_failure(self) -> str:
        """One-line description of why the command failed."""
        if self.error:
            return self.error
        if self.timed_out:
            return "timed out"
        stderr = (self.stderr or "").strip()
        detail = stderr.splitlines()[-1] if stderr else ""
        return f"exit code {self.exit_code}" + (f": {detail}" if detail else "")


class CommandRunner(Protocol):
    """Capability to run an external command to completion."""

    def run(self, command: list[str], *, cwd: Path | None = None) -> CommandResult: ...


class SubprocessRunner:
    """CommandRunner backed by subprocess.run."""

    def __init__(self, timeout_seconds: int | None = None) -> None:
        """Initialize runner.

        Args:
            timeout_seconds: Per-command timeout; None waits indefinitely
        """
        self.timeout_seconds = timeout_seconds

    def run(self, command: list[str], *, cwd: Path | None = None) -> CommandResult:
        command = [str(part) for part in command]
        logger.debug(f"Running: {shlex.join(command)}")
        try:
            proc = subprocess.run(
                command,
                cwd=str(cwd) if cwd else None,
                capture_output=True,
                text=True,
                encoding="utf-8",
                errors="replace",
                timeout=self.timeout_seconds,
                check=False,
            )
        except subprocess.TimeoutExpired as exc:
            return CommandResult(
                command=command,
                exit_code=None,
                stdout=_decode(exc.stdout),
                stderr=_decode(exc.stderr),
                timed_out=True,
            )
        except OSError as e:
            return CommandResult(command=command, exit_code=None, error=f"failed to start {command[0]}: {e}")

        return CommandResult(
            command=command,
            exit_code=proc.returncode,
            stdout=proc.stdout or "",
            stderr=proc.stderr or "",
        )


def _decode(output: bytes | str | None) -> str:
    """Partial output of a timed-out process arrives undecoded."""
    if output is None:
        return ""
    if isinstance(output, bytes):
        return output.decode("utf-8", errors="replace")
    return output
