"""Shared data models for thriftbuild."""

from .build import BuildRequest
from .build import BuildResult
from .build import StalenessDecision
from .build import StalenessState

__all__ = [
    "BuildRequest",
    "BuildResult",
    "StalenessDecision",
    "StalenessState",
]
