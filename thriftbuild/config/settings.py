"""Settings model for thriftbuild.

Per-invocation paths come from the command line; everything that stays the
same across builds of a project lives here.

Contract:
- Inputs: Environment variables, YAML files
- Outputs: Validated settings objects
- Side Effects: None (read-only)
"""

from typing import Literal

from pydantic import field_validator
from pydantic_settings import BaseSettings
from pydantic_settings import SettingsConfigDict


class BuildSettings(BaseSettings):
    """Configuration for the Thrift build task.

    Attributes:
        log_level: Logging level (default: info)
        generator_language: Thrift --gen target (default: csharp)
        definition_suffix: Suffix of interface definition files
        source_suffix: Suffix of generated sources handed to the compiler
        compiler_executable: C# compiler command (default: csc)
        emit_debug_information: Pass /debug+ to the compiler
        marker_name: File name of the last-build marker
        timestamp_comparison: "ordinal" (string order) or "numeric"
        timeout_seconds: Per-process timeout, None waits indefinitely
        clean_after_build: Remove generated sources after a successful build

    Example:
        >>> settings = BuildSettings()
        >>> assert settings.generator_language == "csharp"
        >>> assert settings.marker_name == "LAST_COMP_TIMESTAMP"
    """

    model_config = SettingsConfigDict(
        env_prefix="THRIFTBUILD_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    log_level: str = "info"

    generator_language: str = "csharp"
    definition_suffix: str = ".thrift"
    source_suffix: str = ".cs"

    compiler_executable: str = "csc"
    emit_debug_information: bool = True

    marker_name: str = "LAST_COMP_TIMESTAMP"
    timestamp_comparison: Literal["ordinal", "numeric"] = "ordinal"

    timeout_seconds: int | None = None
    clean_after_build: bool = True

    @field_validator("definition_suffix", "source_suffix")
    @classmethod
    def ensure_leading_dot(cls, v: str) -> str:
        """Accept "thrift" as well as ".thrift"."""
        v = v.strip()
        return v if v.startswith(".") else f".{v}"

    @field_validator("timeout_seconds")
    @classmethod
    def positive_timeout(cls, v: int | None) -> int | None:
        if v is not None and v <= 0:
            raise ValueError("timeout_seconds must be positive")
        return v
