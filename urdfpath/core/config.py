"""
Configuration for urdfpath

Default settings for package discovery and path resolution, stored as an
OmegaConf DictConfig. Components accept an optional cfg and fall back to
these defaults.

Usage:
    cfg = load_config("configs/importer.yaml", overrides=["resolver.prefab_extension=.asset"])
    index = PackageIndex(cfg)
"""

from __future__ import annotations

from pathlib import Path
from typing import List, Optional, Union

from omegaconf import DictConfig, OmegaConf

DEFAULT_CONFIG = {
    "discovery": {
        # Environment variable holding the package search path list
        "package_path_env": "ROS_PACKAGE_PATH",
        "fallback_search_roots": ["/opt/ros/noetic/share/"],
        "workspace_marker": ".catkin_workspace",
        "manifest_name": "package.xml",
    },
    "resolver": {
        "material_folder": "Materials",
        "material_extension": ".mat",
        "prefab_source_extensions": [".stl"],
        "prefab_extension": ".prefab",
    },
}


def default_config() -> DictConfig:
    """Create a fresh copy of the default configuration."""
    return OmegaConf.create(DEFAULT_CONFIG)


def load_config(
    config_path: Optional[Union[str, Path]] = None,
    overrides: Optional[List[str]] = None,
) -> DictConfig:
    """
    Load configuration, layering file and overrides on top of defaults.

    Args:
        config_path: Optional YAML file. Missing keys keep their defaults.
        overrides: Dotlist overrides (e.g. ["discovery.manifest_name=manifest.xml"])

    Returns:
        Merged configuration

    Raises:
        FileNotFoundError: If config_path is given but does not exist
    """
    result = default_config()

    if config_path is not None:
        config_file = Path(config_path)
        if not config_file.exists():
            raise FileNotFoundError(f"Config file not found: {config_file}")
        result = OmegaConf.merge(result, OmegaConf.load(config_file))

    if overrides:
        override_conf = OmegaConf.from_dotlist(overrides)
        result = OmegaConf.merge(result, override_conf)

    return result


def resolve_config(cfg: Optional[DictConfig]) -> DictConfig:
    """Merge a partial config over the defaults; None yields the defaults."""
    if cfg is None:
        return default_config()
    return OmegaConf.merge(default_config(), cfg)
