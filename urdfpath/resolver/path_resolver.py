"""
URDF Asset Path Resolver

Turns asset references found in URDF/XACRO files into locations the importer
can load:

- package://<pkg>/<rest>  -> <package root>/<pkg>/<rest> when imported into
                             the asset tree, else <indexed pkg dir>/<rest>
- file:///abs/path        -> /abs/path (outside the asset tree)
- relative/path           -> <package root>/relative/path
- ../relative/path        -> treated as package://relative/path

The resolver also owns the package root, the asset-tree folder that imported
robot assets (and their Materials/ folder) live in.
"""

from __future__ import annotations

import logging
import os
import posixpath
from typing import Optional

from omegaconf import DictConfig

from urdfpath.core.config import resolve_config
from urdfpath.core.hooks import EventType, HookManager
from urdfpath.core.host import AssetHost
from urdfpath.core.types import (
    ASSET_TREE_NAME,
    FILE_SCHEME,
    LEGACY_TRAVERSAL_PREFIX,
    PACKAGE_SCHEME,
    ResolvedPath,
    normalize_separators,
)
from urdfpath.discovery.package_index import PackageIndex

logger = logging.getLogger(__name__)


def _in_asset_tree(path: str) -> bool:
    return path == ASSET_TREE_NAME or path.startswith(ASSET_TREE_NAME + "/")


class PathResolver:
    """
    Resolution context: package root + package index + asset host.

    Each importer run owns one resolver; nothing is shared between instances.

    Example:
        >>> resolver = PathResolver(LocalAssetHost("/proj/Assets"))
        >>> resolver.set_package_root("/proj/Assets/Robots/ur5")
        >>> resolver.resolve("meshes/base.stl").path
        'Assets/Robots/ur5/meshes/base.prefab'
    """

    def __init__(
        self,
        host: AssetHost,
        cfg: Optional[DictConfig] = None,
        index: Optional[PackageIndex] = None,
        hooks: Optional[HookManager] = None,
    ):
        """
        Initialize resolver.

        Args:
            host: Engine asset database
            cfg: Configuration (uses resolver.* and discovery.*). None for defaults.
            index: Package index to consult. A new one is created if None.
            hooks: HookManager for resolver events. Defaults to the index's.
        """
        self.host = host
        self.cfg = resolve_config(cfg)
        self.index = index if index is not None else PackageIndex(self.cfg, hooks=hooks)
        self.hooks = hooks if hooks is not None else self.index.hooks
        self._package_root: Optional[str] = None
        self._prefab_sources = {
            ext.lower() for ext in self.cfg.resolver.prefab_source_extensions
        }

    # =========================================================================
    # Package root
    # =========================================================================

    @property
    def package_root(self) -> Optional[str]:
        """Asset-relative package root, None until set_package_root() is called."""
        return self._package_root

    def get_package_root(self) -> Optional[str]:
        return self._package_root

    def _require_package_root(self) -> str:
        if self._package_root is None:
            raise RuntimeError(
                "Package root is not set. Call set_package_root() before resolving asset paths."
            )
        return self._package_root

    def set_package_root(
        self, new_path: str, correcting_prior_misconfiguration: bool = False
    ) -> None:
        """
        Set the asset-tree folder imported robot assets are stored under.

        Ensures <root>/Materials exists. When correcting a previous root,
        the old Materials folder is moved to the new root.

        Args:
            new_path: Absolute (or asset-relative) folder path inside the asset tree
            correcting_prior_misconfiguration: Relocate materials from the old root

        Raises:
            ValueError: If new_path lies outside the asset tree
        """
        new_root = posixpath.normpath(self.get_relative_asset_path(new_path))
        if not _in_asset_tree(new_root):
            raise ValueError(
                f"Package root must be inside the asset tree {self.host.asset_root}, got '{new_path}'"
            )

        old_root = self._package_root
        self._package_root = new_root

        if correcting_prior_misconfiguration and old_root is not None:
            self._move_materials(old_root)
        self._ensure_materials_folder()

        logger.info(f"Package root set to {self._package_root} (previous: {old_root})")
        self.hooks.emit(
            EventType.ON_PACKAGE_ROOT_CHANGED, old_root=old_root, new_root=self._package_root
        )

    def _materials_folder(self, root: str) -> str:
        return posixpath.join(root, self.cfg.resolver.material_folder)

    def _ensure_materials_folder(self) -> None:
        if not self.host.is_valid_folder(self._materials_folder(self._package_root)):
            self.host.create_folder(self._package_root, self.cfg.resolver.material_folder)

    def _move_materials(self, old_root: str) -> None:
        old_folder = self._materials_folder(old_root)
        new_folder = self._materials_folder(self._package_root)
        if old_folder == new_folder or not self.host.is_valid_folder(old_folder):
            return
        if self.host.is_valid_folder(new_folder):
            logger.warning(
                f"Not moving {old_folder}: {new_folder} already exists"
            )
            return
        self.host.move_asset(old_folder, new_folder)
        logger.info(f"Moved materials {old_folder} -> {new_folder}")

    def get_material_asset_path(self, material_name: str) -> str:
        """
        Asset path of a generated material.

        Directory components and the extension of material_name are dropped:
        "foo/bar/baz.png" -> "<root>/Materials/baz.mat".
        """
        root = self._require_package_root()
        basename = posixpath.basename(normalize_separators(material_name))
        stem = posixpath.splitext(basename)[0]
        return posixpath.join(
            self._materials_folder(root), stem + self.cfg.resolver.material_extension
        )

    # =========================================================================
    # Asset tree conversion
    # =========================================================================

    def get_relative_asset_path(self, absolute_path: str) -> str:
        """
        Convert an absolute path inside the asset tree to "Assets/...".

        Paths that are already asset-relative are returned normalized.
        Paths outside the asset tree are returned unchanged (normalized).
        """
        path = normalize_separators(absolute_path)
        asset_root = normalize_separators(self.host.asset_root).rstrip("/")

        if path == asset_root or path.startswith(asset_root + "/"):
            return ASSET_TREE_NAME + path[len(asset_root):]
        if _in_asset_tree(path):
            return path

        if not self.host.is_runtime_mode():
            logger.warning(f"Path {path} is outside the asset tree {asset_root}")
        return path

    def get_full_asset_path(self, relative_path: str) -> str:
        """
        Convert an asset-relative path to an absolute path.

        "Assets/..." maps under the asset root; other relative paths are
        taken relative to the project directory containing the asset root.
        """
        path = normalize_separators(relative_path)
        asset_root = normalize_separators(self.host.asset_root).rstrip("/")
        if _in_asset_tree(path):
            return asset_root + path[len(ASSET_TREE_NAME):]
        return posixpath.join(posixpath.dirname(asset_root), path)

    # =========================================================================
    # Resolution
    # =========================================================================

    def resolve(self, uri: str, convert_to_prefab: bool = True) -> ResolvedPath:
        """
        Resolve a URDF asset reference.

        Args:
            uri: package://, file://, relative or legacy ../ reference
            convert_to_prefab: Rewrite mesh extensions replaced by generated
                               prefabs (e.g. .stl -> .prefab)

        Returns:
            ResolvedPath. Check .found: an unknown package yields an empty
            path with missing_package set.

        Raises:
            ValueError: If uri is empty
            RuntimeError: If an asset-tree result is needed but no package root is set
        """
        if not uri:
            raise ValueError("Cannot resolve an empty asset reference")

        if (
            not uri.startswith(FILE_SCHEME)
            and not uri.startswith(PACKAGE_SCHEME)
            and uri.startswith(LEGACY_TRAVERSAL_PREFIX)
        ):
            rewritten = PACKAGE_SCHEME + uri[len(LEGACY_TRAVERSAL_PREFIX):]
            logger.warning(
                f"Replacing leading '../' in '{uri}' with '{PACKAGE_SCHEME}' "
                "to prevent path traversal out of the package root"
            )
            self.hooks.emit(EventType.ON_TRAVERSAL_BLOCKED, original=uri, rewritten=rewritten)
            uri = rewritten

        if uri.startswith(PACKAGE_SCHEME):
            return self._resolve_package_uri(
                normalize_separators(uri[len(PACKAGE_SCHEME):]), convert_to_prefab
            )

        if uri.startswith(FILE_SCHEME):
            path = normalize_separators(uri[len(FILE_SCHEME):])
            if convert_to_prefab:
                path = self.to_prefab_path(path)
            return ResolvedPath(path=path, is_file_uri=True)

        return self._in_package_root(normalize_separators(uri), convert_to_prefab)

    def _in_package_root(self, path: str, convert_to_prefab: bool) -> ResolvedPath:
        root = self._require_package_root()
        if convert_to_prefab:
            path = self.to_prefab_path(path)
        return ResolvedPath(path=posixpath.join(root, path))

    def _resolve_package_uri(self, path: str, convert_to_prefab: bool) -> ResolvedPath:
        root = self._require_package_root()

        # Package already imported into the asset tree
        if self.is_valid_asset_path(self.get_full_asset_path(posixpath.join(root, path))):
            return self._in_package_root(path, convert_to_prefab)

        package_name, _, rest = path.partition("/")
        package_dir = self.index.lookup(package_name)
        if package_dir:
            resolved = posixpath.join(package_dir, rest) if rest else package_dir
            return ResolvedPath(path=resolved, is_external=True)

        # Search roots laid out as <root>/<package>/... without manifests
        for search_root in self.index.last_search_roots:
            candidate = posixpath.join(normalize_separators(search_root), path)
            if self.is_valid_asset_path(candidate):
                logger.info(f"Located {PACKAGE_SCHEME}{path} under search root {search_root}")
                return ResolvedPath(path=candidate, is_external=True)

        logger.warning(f"Unresolved asset reference {PACKAGE_SCHEME}{path}")
        return ResolvedPath(path="", missing_package=package_name)

    def to_prefab_path(self, path: str) -> str:
        """Swap a prefab-replaced mesh extension (any length) for the prefab extension."""
        stem, ext = posixpath.splitext(path)
        if ext.lower() in self._prefab_sources:
            return stem + self.cfg.resolver.prefab_extension
        return path

    @staticmethod
    def is_valid_asset_path(path: str) -> bool:
        """Whether path names an existing file or directory."""
        return os.path.isdir(path) or os.path.isfile(path)

    def __repr__(self) -> str:
        return f"PathResolver(package_root={self._package_root}, index={self.index!r})"
