"""Filesystem layout of a Thrift build.

Contract:
- Inputs: Definition directory, output directory, suffixes
- Outputs: Sorted lists of Path objects
- Side Effects: delete_generated_dir removes the generated source tree
"""

import logging
import shutil
from pathlib import Path

from thriftbuild.reporting import MessageSink

logger = logging.getLogger(__name__)


def find_definition_files(definition_dir: Path, suffix: str = ".thrift") -> list[Path]:
    """List definition files directly inside a directory.

    Args:
        definition_dir: Directory to scan (not recursive)
        suffix: Definition file suffix

    Returns:
        Sorted definition file paths
    """
    if not definition_dir.is_dir():
        return []
    return sorted(p for p in definition_dir.iterdir() if p.is_file() and p.suffix == suffix)


def find_generated_sources(source_dir: Path, suffix: str = ".cs", extra: Path | None = None) -> list[Path]:
    """Collect generated sources recursively.

    Files of each directory come before those of its subdirectories, both in
    sorted order. An optional extra source (e.g. assembly metadata) is
    appended last.

    Args:
        source_dir: Root of the generated source tree
        suffix: Source file suffix
        extra: Optional additional source file

    Returns:
        Source file paths to hand to the compiler
    """
    sources: list[Path] = []
    if source_dir.is_dir():
        _collect_sources(source_dir, suffix, sources)
    if extra is not None:
        sources.append(extra)
    return sources


def _collect_sources(directory: Path, suffix: str, into: list[Path]) -> None:
    children = sorted(directory.iterdir())
    into.extend(p for p in children if p.is_file() and p.suffix == suffix)
    for child in children:
        if child.is_dir():
            _collect_sources(child, suffix, into)


def generated_dir(output_dir: Path, language: str = "csharp") -> Path:
    """Directory the generator writes into (``gen-<language>``)."""
    return output_dir / f"gen-{language}"


def delete_generated_dir(output_dir: Path, language: str = "csharp", sink: MessageSink | None = None) -> bool:
    """Best-effort removal of the generated source tree.

    A failure is reported as a warning and never raised; the next generation
    step overwrites files in place.

    Args:
        output_dir: Directory containing the generated tree
        language: Generator language
        sink: Message sink for the warning

    Returns:
        True if the tree is gone afterwards
    """
    sink = sink or logger
    target = generated_dir(output_dir, language)
    if not target.exists():
        return True
    try:
        shutil.rmtree(target)
    except OSError as e:
        sink.warning(f"Could not delete {target}, generated files will be overwritten: {e}")
        return False
    sink.debug(f"Deleted generated sources at {target}")
    return True
