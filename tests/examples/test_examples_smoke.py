"""
Smoke tests for all scripts under examples/.
"""

from __future__ import annotations

import os
import subprocess
import sys
from pathlib import Path

import pytest


REPO_ROOT = Path(__file__).resolve().parents[2]
EXAMPLES_DIR = REPO_ROOT / "examples"

MANIFEST = "<package format=\"2\"><name>demo_description</name></package>"


def _run(script_name: str, *args: str, env_extra: dict | None = None) -> subprocess.CompletedProcess:
    env = os.environ.copy()
    env["PYTHONUNBUFFERED"] = "1"
    pythonpath_items = [str(REPO_ROOT)]
    if env.get("PYTHONPATH"):
        pythonpath_items.append(env["PYTHONPATH"])
    env["PYTHONPATH"] = os.pathsep.join(pythonpath_items)
    env.update(env_extra or {})

    return subprocess.run(
        [sys.executable, str(EXAMPLES_DIR / script_name), *args],
        capture_output=True,
        text=True,
        timeout=60,
        env=env,
    )


@pytest.fixture
def demo_share(tmp_path):
    package_dir = tmp_path / "share" / "demo_description"
    (package_dir / "meshes").mkdir(parents=True)
    (package_dir / "package.xml").write_text(MANIFEST)
    (package_dir / "meshes" / "base.stl").write_text("solid base")
    return tmp_path / "share"


@pytest.mark.smoke
def test_crawl_packages(demo_share):
    result = _run("02_crawl_packages.py", str(demo_share))
    combined = f"{result.stdout}\n{result.stderr}"
    assert result.returncode == 0, combined
    assert "demo_description" in result.stdout
    assert "1 package(s) indexed" in result.stdout


@pytest.mark.smoke
def test_resolve_uris(demo_share, tmp_path):
    project = tmp_path / "project"
    (project / "Assets").mkdir(parents=True)

    result = _run(
        "01_resolve_uris.py",
        "--project", str(project),
        "package://demo_description/meshes/base.stl",
        "meshes/link.stl",
        env_extra={"ROS_PACKAGE_PATH": str(demo_share)},
    )
    combined = f"{result.stdout}\n{result.stderr}"
    assert result.returncode == 0, combined
    assert "[external]" in result.stdout
    assert "Assets/URDF/meshes/link.prefab" in result.stdout
    assert (project / "Assets" / "URDF" / "Materials").is_dir()


@pytest.mark.smoke
def test_resolve_missing_package_exit_code(tmp_path):
    project = tmp_path / "project"
    (project / "Assets").mkdir(parents=True)

    result = _run(
        "01_resolve_uris.py",
        "--project", str(project),
        "package://ghost_pkg/meshes/a.stl",
        env_extra={"ROS_PACKAGE_PATH": str(tmp_path / "empty")},
    )
    assert result.returncode == 1
    assert "NOT FOUND" in result.stdout
