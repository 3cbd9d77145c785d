"""
Asset Host Abstraction

The embedding engine owns the asset tree: it creates and moves folders and
knows whether the importer runs inside the editor or in a sandboxed runtime.
PathResolver only talks to it through AssetHost.
"""

from __future__ import annotations

import logging
import os
import shutil
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Union

from urdfpath.core.types import ASSET_TREE_NAME, normalize_separators

logger = logging.getLogger(__name__)


class AssetHost(ABC):
    """
    Abstract base class for the engine-side asset database.

    Paths passed to folder operations are asset-tree relative
    (e.g. "Assets/Robots/ur5/Materials").
    """

    @property
    @abstractmethod
    def asset_root(self) -> str:
        """Absolute path of the asset tree root directory."""
        pass

    @abstractmethod
    def is_valid_folder(self, path: str) -> bool:
        """
        Check whether an asset-relative folder exists.

        Args:
            path: Asset-relative folder path

        Returns:
            True if the folder exists in the asset tree
        """
        pass

    @abstractmethod
    def create_folder(self, parent: str, name: str) -> str:
        """
        Create a folder under an asset-relative parent.

        Args:
            parent: Asset-relative parent folder
            name: Name of the new folder

        Returns:
            Asset-relative path of the created folder
        """
        pass

    @abstractmethod
    def move_asset(self, src: str, dst: str) -> None:
        """
        Move an asset or folder within the asset tree.

        Args:
            src: Asset-relative source path
            dst: Asset-relative destination path
        """
        pass

    @abstractmethod
    def is_runtime_mode(self) -> bool:
        """Whether the importer runs in a sandboxed runtime instead of the editor."""
        pass


class LocalAssetHost(AssetHost):
    """
    AssetHost backed by plain directories on disk.

    The asset tree is a directory (conventionally named "Assets") inside a
    project directory; asset-relative paths are resolved against the project
    directory.

    Example:
        >>> host = LocalAssetHost("/home/me/UnityProject/Assets")
        >>> host.create_folder("Assets/Robots", "Materials")
        'Assets/Robots/Materials'
    """

    def __init__(self, asset_root: Union[str, Path], runtime_mode: bool = False):
        """
        Initialize local host.

        Args:
            asset_root: Absolute path of the asset tree directory
            runtime_mode: Report sandboxed runtime mode instead of editor mode
        """
        self._asset_root = normalize_separators(os.path.abspath(str(asset_root))).rstrip("/")
        self._runtime_mode = runtime_mode

    @property
    def asset_root(self) -> str:
        return self._asset_root

    @property
    def project_dir(self) -> str:
        """Directory containing the asset tree."""
        return os.path.dirname(self._asset_root)

    def _absolute(self, path: str) -> str:
        path = normalize_separators(path)
        if os.path.isabs(path):
            return path
        if path == ASSET_TREE_NAME or path.startswith(ASSET_TREE_NAME + "/"):
            return self._asset_root + path[len(ASSET_TREE_NAME):]
        return os.path.join(self.project_dir, path)

    def is_valid_folder(self, path: str) -> bool:
        return os.path.isdir(self._absolute(path))

    def create_folder(self, parent: str, name: str) -> str:
        parent = normalize_separators(parent).rstrip("/")
        os.makedirs(os.path.join(self._absolute(parent), name), exist_ok=True)
        created = f"{parent}/{name}"
        logger.debug(f"LocalAssetHost: created folder {created}")
        return created

    def move_asset(self, src: str, dst: str) -> None:
        src_abs = self._absolute(src)
        dst_abs = self._absolute(dst)
        if os.path.exists(dst_abs):
            raise FileExistsError(f"Cannot move '{src}': destination '{dst}' already exists")
        os.makedirs(os.path.dirname(dst_abs), exist_ok=True)
        shutil.move(src_abs, dst_abs)
        logger.debug(f"LocalAssetHost: moved {src} -> {dst}")

    def is_runtime_mode(self) -> bool:
        return self._runtime_mode

    def __repr__(self) -> str:
        return f"LocalAssetHost(asset_root={self._asset_root}, runtime_mode={self._runtime_mode})"
