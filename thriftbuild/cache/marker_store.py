"""Marker file recording the basis of the last successful build.

The marker is a single decimal string stored next to the definition files.
It is the only state persisted between invocations.
"""

from __future__ import annotations

import contextlib
import logging
import os
from pathlib import Path

logger = logging.getLogger(__name__)

DEFAULT_MARKER_NAME = "LAST_COMP_TIMESTAMP"


class MarkerStore:
    """Reads and writes the last-build marker for one definition directory."""

    def __init__(self, definition_dir: Path, marker_name: str = DEFAULT_MARKER_NAME) -> None:
        """Initialize marker store.

        Args:
            definition_dir: Directory holding the definition files
            marker_name: File name of the marker
        """
        self.path = Path(definition_dir) / marker_name

    def exists(self) -> bool:
        return self.path.is_file()

    def read(self) -> str | None:
        """Read the recorded mark.

        Returns:
            Stripped marker contents, or None when absent or unreadable
        """
        if not self.exists():
            return None
        try:
            value = self.path.read_text(encoding="utf-8").strip()
        except (OSError, UnicodeDecodeError) as e:
            logger.warning(f"Failed to read marker {self.path}: {e}")
            return None
        return value or None

    def write(self, value: str) -> None:
        """Persist a new mark.

        Writes to a temporary file first, then renames over the marker. The
        definition directory's own timestamps are restored afterwards: its
        modification time counts as a source input, and the marker must not
        make the next invocation look stale.

        Args:
            value: Timestamp string to record

        Raises:
            RuntimeError: If the marker cannot be written
        """
        directory = self.path.parent
        temp_path = self.path.with_name(self.path.name + ".tmp")
        try:
            dir_stat = directory.stat()
            temp_path.write_text(value, encoding="utf-8")
            temp_path.replace(self.path)
            logger.debug(f"Recorded build marker {value} at {self.path}")
        except OSError as e:
            with contextlib.suppress(OSError):
                temp_path.unlink(missing_ok=True)
            raise RuntimeError(f"Failed to write marker {self.path}: {e}") from e

        try:
            os.utime(directory, ns=(dir_stat.st_atime_ns, dir_stat.st_mtime_ns))
        except OSError as e:
            logger.warning(f"Could not restore timestamps of {directory}, next build may rerun: {e}")

    def clear(self) -> None:
        """Remove the marker, forcing a full rebuild next time."""
        if self.path.exists():
            self.path.unlink()
            logger.debug(f"Removed build marker {self.path}")
