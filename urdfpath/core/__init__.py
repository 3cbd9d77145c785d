"""
urdfpath Core Layer

Provides shared data types, configuration, the event/hook system and the
asset host abstraction.
"""

from urdfpath.core.types import (
    PACKAGE_SCHEME,
    FILE_SCHEME,
    ASSET_TREE_NAME,
    ResolvedPath,
    PackageEntry,
    normalize_separators,
)
from urdfpath.core.config import DEFAULT_CONFIG, default_config, load_config
from urdfpath.core.hooks import EventType, HookManager
from urdfpath.core.host import AssetHost, LocalAssetHost

__all__ = [
    # Types
    "PACKAGE_SCHEME",
    "FILE_SCHEME",
    "ASSET_TREE_NAME",
    "ResolvedPath",
    "PackageEntry",
    "normalize_separators",
    # Config
    "DEFAULT_CONFIG",
    "default_config",
    "load_config",
    # Hooks
    "EventType",
    "HookManager",
    # Host
    "AssetHost",
    "LocalAssetHost",
]
