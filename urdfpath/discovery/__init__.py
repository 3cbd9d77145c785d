"""
urdfpath Discovery Layer - ROS package discovery

Crawls search roots for package manifests and caches package locations.
"""

from urdfpath.discovery.package_index import PackageIndex, ManifestError, read_package_name
from urdfpath.discovery.search_roots import get_search_roots, detect_workspace_src

__all__ = [
    "PackageIndex",
    "ManifestError",
    "read_package_name",
    "get_search_roots",
    "detect_workspace_src",
]
