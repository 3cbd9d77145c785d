"""
urdfpath - Asset path resolution for URDF robot importers
"""

__version__ = "0.1.0"

from urdfpath.core.host import AssetHost, LocalAssetHost
from urdfpath.core.types import ResolvedPath
from urdfpath.discovery.package_index import PackageIndex
from urdfpath.resolver.path_resolver import PathResolver

__all__ = [
    "AssetHost",
    "LocalAssetHost",
    "PackageIndex",
    "PathResolver",
    "ResolvedPath",
    "__version__",
]
