"""Configuration module using Pydantic Settings.

Usage:
    from objectfactory.config import CopySettings

    settings = CopySettings(parallel_threshold=32)
"""

from objectfactory.config.settings import CopySettings

__all__ = [
    "CopySettings",
]
