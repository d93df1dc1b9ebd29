"""
Unit tests for the marker file store.
"""

from pathlib import Path

import pytest

from thriftbuild.cache.marker_store import DEFAULT_MARKER_NAME
from thriftbuild.cache.marker_store import MarkerStore


@pytest.mark.unit
class TestMarkerStore:
    """Test marker persistence."""

    def test_default_location(self, tmp_path: Path) -> None:
        store = MarkerStore(tmp_path)
        assert store.path == tmp_path / DEFAULT_MARKER_NAME
        assert store.path.name == "LAST_COMP_TIMESTAMP"

    def test_read_absent_returns_none(self, tmp_path: Path) -> None:
        store = MarkerStore(tmp_path)
        assert store.exists() is False
        assert store.read() is None

    def test_write_then_read(self, tmp_path: Path) -> None:
        store = MarkerStore(tmp_path)
        store.write("133485408000000000")

        assert store.exists() is True
        assert store.read() == "133485408000000000"

    def test_write_has_no_trailing_newline(self, tmp_path: Path) -> None:
        store = MarkerStore(tmp_path)
        store.write("42")

        assert store.path.read_bytes() == b"42"
        assert not (tmp_path / "LAST_COMP_TIMESTAMP.tmp").exists()

    def test_write_overwrites(self, tmp_path: Path) -> None:
        store = MarkerStore(tmp_path)
        store.write("1")
        store.write("2")

        assert store.read() == "2"

    def test_read_strips_whitespace(self, tmp_path: Path) -> None:
        (tmp_path / DEFAULT_MARKER_NAME).write_text("123\r\n", encoding="utf-8")
        assert MarkerStore(tmp_path).read() == "123"

    def test_empty_marker_is_absent(self, tmp_path: Path) -> None:
        (tmp_path / DEFAULT_MARKER_NAME).write_text("", encoding="utf-8")
        assert MarkerStore(tmp_path).read() is None

    def test_unreadable_marker_is_absent(self, tmp_path: Path, caplog: pytest.LogCaptureFixture) -> None:
        (tmp_path / DEFAULT_MARKER_NAME).write_bytes(b"\xff\xfe\x00bad")

        assert MarkerStore(tmp_path).read() is None
        assert "Failed to read marker" in caplog.text

    def test_write_preserves_directory_mtime(self, thrift_project) -> None:
        """The marker must not bump the definition directory's timestamp."""
        before = thrift_project.definition_dir.stat().st_mtime_ns
        store = MarkerStore(thrift_project.definition_dir)

        store.write("1")
        store.write("2")

        assert thrift_project.definition_dir.stat().st_mtime_ns == before

    def test_write_to_missing_directory_raises(self, tmp_path: Path) -> None:
        store = MarkerStore(tmp_path / "missing")
        with pytest.raises(RuntimeError, match="Failed to write marker"):
            store.write("1")

    def test_custom_name_and_clear(self, tmp_path: Path) -> None:
        store = MarkerStore(tmp_path, marker_name=".thrift-stamp")
        store.write("7")
        assert (tmp_path / ".thrift-stamp").exists()

        store.clear()
        assert store.read() is None

    def test_failed_cleanup_still_raises_runtime_error(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        """A temp file that cannot be removed does not mask the write failure."""

        def refuse(self, *args, **kwargs):
            raise PermissionError(13, "Permission denied", str(self))

        monkeypatch.setattr(Path, "replace", refuse)
        monkeypatch.setattr(Path, "unlink", refuse)

        with pytest.raises(RuntimeError, match="Failed to write marker"):
            MarkerStore(tmp_path).write("1")
