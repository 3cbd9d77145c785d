"""
Package Discovery Cache

Maps ROS package names to their directories by crawling search roots for
package.xml manifests. The index is additive: crawling never clears it, an
entry only changes when a later crawl finds the same name somewhere else.

Usage:
    index = PackageIndex()
    index.crawl()
    mesh_dir = index.lookup("ur_description")   # "" when unknown
"""

from __future__ import annotations

import logging
import os
import xml.etree.ElementTree as ET
from typing import Dict, ItemsView, List, Mapping, Optional, Sequence, Tuple

from omegaconf import DictConfig

from urdfpath.core.config import resolve_config
from urdfpath.core.hooks import EventType, HookManager
from urdfpath.core.types import PackageEntry, normalize_separators
from urdfpath.discovery.search_roots import get_search_roots

logger = logging.getLogger(__name__)


class ManifestError(ValueError):
    """Raised when a manifest cannot be parsed or declares no package name."""


def read_package_name(manifest_path: str) -> str:
    """
    Read the declared package name from a manifest.

    Takes the first <name> element in the default namespace declared on the
    root element (xmlns="..."), or with no namespace when none is declared.
    Prefixed namespaces on the root (xmlns:p="...") are ignored.

    Args:
        manifest_path: Path of the manifest file

    Returns:
        Package name

    Raises:
        ManifestError: If the file is not valid XML or has no non-empty <name>
    """
    root = None
    default_ns = ""
    try:
        for event, item in ET.iterparse(manifest_path, events=("start-ns", "start")):
            if root is not None:
                continue
            if event == "start-ns":
                prefix, uri = item
                if prefix == "":
                    default_ns = uri
            else:
                root = item
    except (ET.ParseError, OSError) as e:
        raise ManifestError(f"cannot parse manifest: {e}") from e

    tag = f"{{{default_ns}}}name" if default_ns else "name"
    element = next(root.iter(tag), None)
    if element is None:
        raise ManifestError("no <name> element")
    name = (element.text or "").strip()
    if not name:
        raise ManifestError("empty <name> element")
    return name


class PackageIndex:
    """
    Cache of package name -> absolute package directory.

    Search roots are recomputed for every crawl pass unless fixed at
    construction, so changes to the package path environment variable are
    picked up by the next crawl.

    Example:
        >>> index = PackageIndex(search_roots=["/opt/ros/noetic/share"])
        >>> entries = index.crawl()
        >>> index.lookup("urdf_tutorial")
        '/opt/ros/noetic/share/urdf_tutorial'
    """

    def __init__(
        self,
        cfg: Optional[DictConfig] = None,
        search_roots: Optional[Sequence[str]] = None,
        hooks: Optional[HookManager] = None,
        environ: Optional[Mapping[str, str]] = None,
    ):
        """
        Initialize an empty index.

        Args:
            cfg: Configuration (uses discovery.*). None for defaults.
            search_roots: Fixed search roots. None derives them per crawl.
            hooks: Optional HookManager receiving discovery events
            environ: Environment mapping for search root derivation
        """
        self.cfg = resolve_config(cfg)
        self.hooks = hooks or HookManager()
        self._fixed_roots = tuple(search_roots) if search_roots is not None else None
        self._environ = environ
        self._packages: Dict[str, str] = {}
        self._last_roots: Tuple[str, ...] = ()

    @property
    def search_roots(self) -> Tuple[str, ...]:
        """Search roots the next crawl pass will use."""
        if self._fixed_roots is not None:
            return self._fixed_roots
        return get_search_roots(self.cfg, environ=self._environ)

    @property
    def last_search_roots(self) -> Tuple[str, ...]:
        """Search roots used by the most recent crawl pass."""
        return self._last_roots

    def crawl(self, search_roots: Optional[Sequence[str]] = None) -> List[PackageEntry]:
        """
        Scan search roots recursively and record every declared package.

        Malformed manifests are skipped with a warning. A package found in
        a different directory than previously indexed overrides the old entry.

        Args:
            search_roots: Roots for this pass only. None uses search_roots.

        Returns:
            Entries indexed during this pass, in discovery order
        """
        roots = tuple(search_roots) if search_roots is not None else self.search_roots
        self._last_roots = roots
        manifest_name = self.cfg.discovery.manifest_name

        entries: List[PackageEntry] = []
        for root in roots:
            if not os.path.isdir(root):
                logger.debug(f"Skipping missing search root: {root}")
                continue
            for dirpath, dirnames, filenames in os.walk(root):
                dirnames.sort()
                if manifest_name in filenames:
                    entry = self._index_manifest(os.path.join(dirpath, manifest_name))
                    if entry is not None:
                        entries.append(entry)

        logger.info(
            "Crawled %d search root(s): %d manifest(s) indexed, %d package(s) known",
            len(roots),
            len(entries),
            len(self._packages),
        )
        return entries

    def _index_manifest(self, manifest: str) -> Optional[PackageEntry]:
        manifest = normalize_separators(os.path.abspath(manifest))
        try:
            name = read_package_name(manifest)
        except ManifestError as e:
            logger.warning(f"Skipping manifest {manifest}: {e}")
            self.hooks.emit(EventType.ON_MANIFEST_SKIPPED, manifest=manifest, reason=str(e))
            return None

        path = os.path.dirname(manifest)
        existing = self._packages.get(name)
        if existing == path:
            logger.info(f"Package '{name}' already indexed at {path}")
        elif existing is not None:
            logger.warning(
                f"Package '{name}' found at {path}, overriding previously indexed path {existing}"
            )
            self._packages[name] = path
            self.hooks.emit(
                EventType.ON_PACKAGE_OVERRIDDEN, name=name, old_path=existing, new_path=path
            )
        else:
            self._packages[name] = path
            self.hooks.emit(EventType.ON_PACKAGE_INDEXED, name=name, path=path)

        return PackageEntry(name=name, path=path, manifest=manifest)

    def lookup(self, package_name: str) -> str:
        """
        Get the directory of a package, crawling once on a miss.

        Args:
            package_name: Declared package name

        Returns:
            Absolute package directory, or "" if the package is unknown
        """
        if not self._packages or package_name not in self._packages:
            self.crawl()

        path = self._packages.get(package_name)
        if path is None:
            logger.error(
                "Package '%s' not found. Searched: %s",
                package_name,
                list(self._last_roots),
            )
            self.hooks.emit(
                EventType.ON_PACKAGE_NOT_FOUND,
                package_name=package_name,
                search_roots=self._last_roots,
            )
            return ""
        return path

    def get(self, package_name: str) -> Optional[str]:
        """Get an indexed directory without crawling."""
        return self._packages.get(package_name)

    def items(self) -> ItemsView[str, str]:
        return self._packages.items()

    def clear(self) -> None:
        """Drop every entry. Crawling never does this on its own."""
        self._packages.clear()

    def __contains__(self, package_name: str) -> bool:
        return package_name in self._packages

    def __len__(self) -> int:
        return len(self._packages)

    def __repr__(self) -> str:
        return f"PackageIndex(packages={len(self._packages)}, roots={list(self._last_roots)})"
