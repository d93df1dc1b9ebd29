"""File timestamps expressed as 100-nanosecond ticks since 1601-01-01 UTC.

The marker file stores this encoding, so every timestamp the oracle sees goes
through here.
"""

import logging
from pathlib import Path

logger = logging.getLogger(__name__)

# Ticks between 1601-01-01 and 1970-01-01.
EPOCH_OFFSET_TICKS = 116_444_736_000_000_000


def to_ticks(mtime_ns: int) -> int:
    """Convert a POSIX timestamp in nanoseconds to ticks.

    Example:
        >>> to_ticks(0)
        116444736000000000
    """
    return mtime_ns // 100 + EPOCH_OFFSET_TICKS


def file_ticks(path: Path) -> int:
    """Ticks of a path's modification time.

    Args:
        path: File or directory

    Returns:
        Ticks, or 0 (the epoch itself) when the path does not exist
    """
    try:
        return to_ticks(path.stat().st_mtime_ns)
    except FileNotFoundError:
        logger.debug(f"No timestamp for missing path: {path}")
        return 0


def latest_source_ticks(definition_dir: Path, suffix: str = ".thrift") -> str:
    """Newest modification time among definition files and their directory.

    Only files directly inside ``definition_dir`` are considered. With no
    definition files the directory's own time is returned.

    Args:
        definition_dir: Directory holding definition files
        suffix: Definition file suffix

    Returns:
        Ticks as a decimal string
    """
    latest = file_ticks(definition_dir)
    if definition_dir.is_dir():
        for path in definition_dir.iterdir():
            if path.is_file() and path.suffix == suffix:
                latest = max(latest, file_ticks(path))
    return str(latest)


def artifact_ticks(library_path: Path) -> str:
    """Modification time of the referenced library as a decimal string."""
    return str(file_ticks(library_path))
