"""Engine functionality: the copy engine and the module-level operations."""

from objectfactory.engine.core import CopyEngine
from objectfactory.engine.operations import (
    copy,
    copy_all,
    copy_all_with,
    copy_into,
    copy_to,
    get_engine,
)

__all__ = [
    "CopyEngine",
    "get_engine",
    # Operations
    "copy",
    "copy_to",
    "copy_into",
    "copy_all",
    "copy_all_with",
]
