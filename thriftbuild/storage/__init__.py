"""Storage layout for thriftbuild.

Public Interface:
    - find_definition_files: List .thrift inputs
    - find_generated_sources: Walk generated sources
    - generated_dir: Location of the generated tree
    - delete_generated_dir: Best-effort cleanup
"""

from .paths import delete_generated_dir
from .paths import find_definition_files
from .paths import find_generated_sources
from .paths import generated_dir

__all__ = [
    "delete_generated_dir",
    "find_definition_files",
    "find_generated_sources",
    "generated_dir",
]
