"""
Package search roots

Derives the ordered list of directories crawled for package manifests,
either from the package path environment variable or from a fallback list
plus the source workspace this code is running from.
"""

from __future__ import annotations

import logging
import os
from typing import Mapping, Optional, Tuple

from omegaconf import DictConfig

from urdfpath.core.config import resolve_config
from urdfpath.core.types import normalize_separators

logger = logging.getLogger(__name__)

_SRC_SEGMENT = "/src/"


def split_path_list(value: str, separator: str = os.pathsep) -> Tuple[str, ...]:
    """Split a path-list environment value, dropping empty items."""
    return tuple(item for item in value.split(separator) if item)


def detect_workspace_src(code_dir: str, marker: str) -> Optional[str]:
    """
    Find the src/ directory of the source workspace containing code_dir.

    Every "/src/" segment of code_dir is a candidate workspace boundary,
    tried from the innermost outwards; the first prefix holding the marker
    file is the workspace root. This finds ~/src/catkin_ws for code in
    ~/src/catkin_ws/src/<pkg>.

    Args:
        code_dir: Directory of the running code
        marker: Workspace marker file name (e.g. ".catkin_workspace")

    Returns:
        "<workspace>/src/" or None
    """
    normalized = normalize_separators(code_dir).rstrip("/") + "/"
    idx = normalized.rfind(_SRC_SEGMENT)
    while idx >= 0:
        workspace_root = normalized[:idx]
        # "/src/..." at the filesystem root has no workspace prefix
        if workspace_root and os.path.exists(os.path.join(workspace_root, marker)):
            return workspace_root + _SRC_SEGMENT
        # Segments may share a slash: ".../src/src/"
        idx = normalized.rfind(_SRC_SEGMENT, 0, idx + len(_SRC_SEGMENT) - 1)

    logger.debug(f"No workspace marker '{marker}' above {code_dir}")
    return None


def get_search_roots(
    cfg: Optional[DictConfig] = None,
    environ: Optional[Mapping[str, str]] = None,
    code_dir: Optional[str] = None,
) -> Tuple[str, ...]:
    """
    Compute the directories to crawl for package manifests.

    Order of precedence:
    1. The package path environment variable, split on os.pathsep, verbatim
    2. Otherwise the configured fallback roots, plus the workspace src/
       directory when this code runs from inside a marked source workspace

    Args:
        cfg: Configuration (uses discovery.*). None for defaults.
        environ: Environment mapping. Defaults to os.environ.
        code_dir: Directory of the running code. Defaults to this package.

    Returns:
        Ordered tuple of search roots
    """
    cfg = resolve_config(cfg)
    environ = os.environ if environ is None else environ

    value = environ.get(cfg.discovery.package_path_env)
    if value:
        return split_path_list(value)

    roots = list(cfg.discovery.fallback_search_roots)
    if code_dir is None:
        code_dir = os.path.dirname(os.path.abspath(__file__))

    workspace_src = detect_workspace_src(code_dir, cfg.discovery.workspace_marker)
    if workspace_src is not None:
        roots.append(workspace_src)

    logger.debug(
        "%s not set, using fallback search roots: %s",
        cfg.discovery.package_path_env,
        roots,
    )
    return tuple(roots)
