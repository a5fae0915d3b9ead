"""Engine configuration using Pydantic Settings.

Provides typed configuration with environment variable support.

Usage:
    from objectfactory.config import CopySettings

    # Load from environment variables (OBJECTFACTORY_*)
    settings = CopySettings()

    # Or override with explicit values
    settings = CopySettings(parallel=False)
"""

from __future__ import annotations

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class CopySettings(BaseSettings):  # type: ignore[misc]
    """Configuration for the copy engine.

    Attributes:
        parallel: Resolve attribute pairs on a thread pool for wide objects.
        parallel_threshold: Pair count above which parallel resolution kicks in.
        max_workers: Thread pool size (None lets the executor decide).

    Environment Variables:
        OBJECTFACTORY_PARALLEL
        OBJECTFACTORY_PARALLEL_THRESHOLD
        OBJECTFACTORY_MAX_WORKERS
    """

    model_config = SettingsConfigDict(
        env_prefix="OBJECTFACTORY_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    parallel: bool = True
    parallel_threshold: int = Field(default=10, ge=1)
    max_workers: int | None = Field(default=None, ge=1)
