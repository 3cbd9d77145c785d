"""
Core Data Types for urdfpath

Shared result types and URI constants used across the discovery and
resolver layers. Kept in one place to avoid circular imports.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional


# =============================================================================
# URI Schemes
# =============================================================================

PACKAGE_SCHEME = "package://"
"""ROS package URI prefix. The first path segment is the package name."""

FILE_SCHEME = "file://"
"""File URI prefix. The remainder is an absolute filesystem path."""

LEGACY_TRAVERSAL_PREFIX = "../"
"""Legacy relative prefix rewritten to PACKAGE_SCHEME by the resolver."""

ASSET_TREE_NAME = "Assets"
"""Name of the engine-managed asset tree, relative paths start with it."""


def normalize_separators(path: str) -> str:
    """Convert backslashes to forward slashes (asset tree convention)."""
    return path.replace("\\", "/")


# =============================================================================
# Resolution Result
# =============================================================================

@dataclass(frozen=True)
class ResolvedPath:
    """
    Result of resolving a URDF asset reference.

    Usage:
        >>> result = resolver.resolve("package://my_robot/meshes/base.stl")
        >>> if result.found:
        ...     load(result.path)
    """

    path: str
    """Resolved location. Empty when the referenced package was not found."""

    is_file_uri: bool = False
    """True when the input used file://, path is an absolute filesystem path."""

    is_external: bool = False
    """True when path lies outside the asset tree (indexed ROS package)."""

    missing_package: Optional[str] = None
    """Name of the package that could not be located, if any."""

    @property
    def found(self) -> bool:
        """Whether resolution produced a usable path."""
        return self.missing_package is None

    def __str__(self) -> str:
        return self.path


# =============================================================================
# Discovery Record
# =============================================================================

@dataclass(frozen=True)
class PackageEntry:
    """A package discovered while crawling manifests."""

    name: str
    """Declared package name (<name> element of the manifest)."""

    path: str
    """Absolute directory containing the manifest."""

    manifest: str
    """Absolute path of the manifest file itself."""
