"""Staleness oracle for generated Thrift libraries.

Decides from three timestamps whether the regenerate-and-recompile path can be
skipped. The oracle performs no I/O; callers compute the timestamps and act on
the returned decision.

Contract:
- Inputs: artifact time, latest source time, recorded mark (or None)
- Outputs: StalenessDecision (CURRENT means skip)
- Side Effects: None
"""

from __future__ import annotations

from typing import Literal

from thriftbuild.models import StalenessDecision
from thriftbuild.models import StalenessState

ComparisonMode = Literal["ordinal", "numeric"]


def compare_marks(left: str, right: str, mode: ComparisonMode = "ordinal") -> int:
    """Three-way comparison of two encoded timestamps.

    Ordinal mode compares code points, which matches numeric order only when
    both strings have the same number of digits. Numeric mode parses both sides
    and falls back to ordinal order if either side is not an integer.

    Args:
        left: First timestamp string
        right: Second timestamp string
        mode: "ordinal" or "numeric"

    Returns:
        Negative, zero or positive, like a classic cmp()

    Example:
        >>> compare_marks("100", "200")
        -1
        >>> compare_marks("99", "100")
        1
        >>> compare_marks("99", "100", mode="numeric")
        -1
    """
    a: str | int = left
    b: str | int = right
    if mode == "numeric":
        try:
            a, b = int(left), int(right)
        except ValueError:
            a, b = left, right
    return (a > b) - (a < b)


def _same(left: str, right: str, mode: ComparisonMode) -> bool:
    if mode == "numeric":
        return compare_marks(left, right, mode) == 0
    return left == right


def artifact_modified_since_record(artifact_time: str, recorded_mark: str, mode: ComparisonMode = "ordinal") -> bool:
    """True when the record is older than the artifact itself."""
    return compare_marks(recorded_mark, artifact_time, mode) < 0


def is_up_to_date(
    artifact_time: str,
    basis: str,
    recorded_mark: str,
    mode: ComparisonMode = "ordinal",
) -> bool:
    """Up-to-date test against a (possibly substituted) basis.

    Current when the record matches the basis exactly, or when the record
    equals the artifact's own time and is newer than the basis.
    """
    if _same(recorded_mark, basis, mode):
        return True
    return _same(recorded_mark, artifact_time, mode) and compare_marks(recorded_mark, basis, mode) > 0


def decide(
    artifact_time: str,
    source_latest: str,
    recorded_mark: str | None,
    mode: ComparisonMode = "ordinal",
) -> StalenessDecision:
    """Decide whether a previous build is still valid.

    Args:
        artifact_time: Ticks of the referenced library file
        source_latest: Ticks of the newest definition file (or its directory)
        recorded_mark: Value persisted by the last successful build, if any
        mode: Timestamp comparison mode

    Returns:
        Decision carrying the state and the basis to persist after a rebuild

    Example:
        >>> decide("200", "150", "100").state
        <StalenessState.STALE: 'stale'>
        >>> decide("100", "150", "150").skip
        True
    """
    if recorded_mark is None:
        return StalenessDecision(
            state=StalenessState.STALE,
            basis=source_latest,
            reason="no previous build recorded",
        )

    basis = source_latest
    modified = artifact_modified_since_record(artifact_time, recorded_mark, mode)
    if modified:
        basis = artifact_time

    if is_up_to_date(artifact_time, basis, recorded_mark, mode):
        return StalenessDecision(
            state=StalenessState.CURRENT,
            basis=basis,
            artifact_modified=modified,
            reason="recorded mark matches",
        )

    reason = "library modified since last build" if modified else "definitions modified since last build"
    return StalenessDecision(
        state=StalenessState.STALE,
        basis=basis,
        artifact_modified=modified,
        reason=reason,
    )
