"""Cloning functionality: per-attribute decisions, leaf, container and enum copies."""

from objectfactory.cloning.containers import ContainerCloner
from objectfactory.cloning.enums import convert_enum, find_member, textual_form
from objectfactory.cloning.leaf import LeafCloner
from objectfactory.cloning.orchestrator import CopyOrchestrator
from objectfactory.cloning.proxy import ProxyHandler
from objectfactory.cloning.shapes import rebuild_container, restore_shape

__all__ = [
    "CopyOrchestrator",
    "ContainerCloner",
    "LeafCloner",
    "ProxyHandler",
    # Enums
    "convert_enum",
    "find_member",
    "textual_form",
    # Shapes
    "rebuild_container",
    "restore_shape",
]
