"""Shared test fixtures."""

import sys

import pytest

# Ensure src is in path
sys.path.insert(0, "src")

from objectfactory import CopyEngine, CopySettings, NullProxySubsystem, SchemaRegistry


@pytest.fixture
def engine():
    """Sequential engine with a fresh cache and no proxy support."""
    with CopyEngine(settings=CopySettings(parallel=False), proxies=NullProxySubsystem()) as e:
        yield e


@pytest.fixture
def parallel_engine():
    """Engine that resolves more than two attributes on the worker pool."""
    settings = CopySettings(parallel=True, parallel_threshold=2, max_workers=4)
    with CopyEngine(settings=settings, proxies=NullProxySubsystem()) as e:
        yield e


@pytest.fixture
def registry():
    """Isolated schema registry."""
    return SchemaRegistry()
