"""Data models for a single build invocation.

Pydantic validates the inputs coming from the command line or a host; plain
dataclasses carry results between layers.
"""

from __future__ import annotations

from dataclasses import dataclass
from dataclasses import field
from enum import Enum
from pathlib import Path

from pydantic import BaseModel
from pydantic import ConfigDict
from pydantic import Field
from pydantic import field_validator


class StalenessState(str, Enum):
    """Outcome of the up-to-date check."""

    STALE = "stale"
    CURRENT = "current"


@dataclass(frozen=True)
class StalenessDecision:
    """Decision returned by the staleness oracle.

    Attributes:
        state: STALE (regenerate) or CURRENT (skip)
        basis: Timestamp to persist after a successful rebuild
        artifact_modified: True when the library changed after the last record
        reason: Short human-readable explanation
    """

    state: StalenessState
    basis: str
    artifact_modified: bool = False
    reason: str = ""

    @property
    def skip(self) -> bool:
        """True when regeneration can be skipped."""
        return self.state is StalenessState.CURRENT


class BuildRequest(BaseModel):
    """Inputs of one build invocation.

    Attributes:
        thrift_executable: Path to the Thrift code generator
        thrift_library: Path to the Thrift runtime library; output lands beside it
        definition_dir: Directory containing .thrift files
        output_name: File name of the compiled library
        assembly_info: Optional metadata source compiled with the generated code
    """

    model_config = ConfigDict(frozen=True)

    thrift_executable: Path = Field(..., description="Path to the Thrift code generator")
    thrift_library: Path = Field(..., description="Path to the referenced Thrift runtime library")
    definition_dir: Path = Field(..., description="Directory containing interface definitions")
    output_name: str = Field(..., description="File name of the compiled library")
    assembly_info: Path | None = Field(default=None, description="Optional metadata source file")

    @field_validator("thrift_executable", "thrift_library", "definition_dir", mode="before")
    @classmethod
    def reject_empty_path(cls, v: object) -> object:
        """Reject empty path strings, which Path() would turn into '.'."""
        if isinstance(v, str) and not v.strip():
            raise ValueError("path must not be empty")
        return v

    @field_validator("output_name")
    @classmethod
    def validate_output_name(cls, v: str) -> str:
        """Output name must be a bare, non-empty file name."""
        v = v.strip()
        if not v:
            raise ValueError("output_name must not be empty")
        if Path(v).name != v:
            raise ValueError(f"output_name must be a file name, not a path: {v}")
        return v

    @field_validator("assembly_info", mode="before")
    @classmethod
    def empty_assembly_info_is_none(cls, v: object) -> object:
        if isinstance(v, str) and not v.strip():
            return None
        return v

    @property
    def output_dir(self) -> Path:
        """Directory receiving generated code and the compiled library."""
        return self.thrift_library.parent

    @property
    def output_path(self) -> Path:
        """Full path of the compiled library."""
        return self.output_dir / self.output_name


@dataclass
class BuildResult:
    """Outcome of one build invocation.

    Attributes:
        success: Whether the invocation succeeded
        skipped: True when outputs were already current
        output_path: Path of the compiled library
        failed_step: Name of the failing step (definition-directory,
            output-directory, generate, compile, marker)
        message: Summary message
        generated_files: Definition files processed before success or failure
        marker: Marker value written on success
    """

    success: bool
    skipped: bool = False
    output_path: Path | None = None
    failed_step: str | None = None
    message: str = ""
    generated_files: list[Path] = field(default_factory=list)
    marker: str | None = None

    @classmethod
    def failure(cls, step: str, message: str, generated_files: list[Path] | None = None) -> BuildResult:
        """Build a failed result."""
        return cls(
            success=False,
            failed_step=step,
            message=message,
            generated_files=list(generated_files or []),
        )
