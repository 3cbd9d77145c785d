"""Pytest configuration file"""

import pytest
import sys
from pathlib import Path

# Add project root to Python path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))


# =============================================================================
# Workspace Builders
# =============================================================================

from unittest.mock import MagicMock

from urdfpath.core.host import AssetHost, LocalAssetHost


MANIFEST_TEMPLATE = """<?xml version="1.0"?>
<package format="2">
  <name>{name}</name>
  <version>1.0.0</version>
  <description>Test package</description>
  <maintainer email="dev@example.com">dev</maintainer>
  <license>BSD</license>
</package>
"""


def write_manifest(package_dir: Path, name: str) -> Path:
    """Create package_dir/package.xml declaring the given package name."""
    package_dir.mkdir(parents=True, exist_ok=True)
    manifest = package_dir / "package.xml"
    manifest.write_text(MANIFEST_TEMPLATE.format(name=name))
    return manifest



class MockHost(AssetHost):
    """In-memory asset host recording folder operations."""

    def __init__(self, asset_root: str = "/project/Assets", runtime_mode: bool = False):
        self._asset_root = asset_root
        self.runtime_mode = runtime_mode
        self.folders = set()
        self.create_folder_calls = []
        self.move_asset = MagicMock(side_effect=self._move)

    @property
    def asset_root(self) -> str:
        return self._asset_root

    def is_valid_folder(self, path: str) -> bool:
        return path in self.folders

    def create_folder(self, parent: str, name: str) -> str:
        self.create_folder_calls.append((parent, name))
        created = f"{parent}/{name}"
        self.folders.add(created)
        return created

    def move_asset(self, src: str, dst: str) -> None:
        # Replaced per instance by a MagicMock wrapping _move
        self._move(src, dst)

    def _move(self, src: str, dst: str) -> None:
        self.folders.discard(src)
        self.folders.add(dst)

    def is_runtime_mode(self) -> bool:
        return self.runtime_mode


# =============================================================================
# Fixtures
# =============================================================================

@pytest.fixture
def mock_host():
    """Provide an in-memory asset host."""
    return MockHost()


@pytest.fixture
def project_dir(tmp_path):
    """Provide a project directory with an empty Assets/ tree."""
    (tmp_path / "project" / "Assets").mkdir(parents=True)
    return tmp_path / "project"


@pytest.fixture
def local_host(project_dir):
    """Provide a LocalAssetHost over project_dir/Assets."""
    return LocalAssetHost(project_dir / "Assets")


@pytest.fixture
def ros_share(tmp_path):
    """
    Provide a search root holding two packages and one broken manifest.

    share/
      robot_description/package.xml   (robot_description)
      robot_description/meshes/base.stl
      nested/tools/gripper/package.xml (gripper_description)
      broken/package.xml              (no <name>)
    """
    share = tmp_path / "share"
    write_manifest(share / "robot_description", "robot_description")
    (share / "robot_description" / "meshes").mkdir()
    (share / "robot_description" / "meshes" / "base.stl").write_text("solid base")
    write_manifest(share / "nested" / "tools" / "gripper", "gripper_description")
    (share / "broken").mkdir()
    (share / "broken" / "package.xml").write_text("<package><version>1.0</version></package>")
    return share


@pytest.fixture
def make_package():
    """Provide write_manifest(package_dir, name) for building packages in tests."""
    return write_manifest
