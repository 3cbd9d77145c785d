"""
URDF Asset Reference Resolution Example

Resolves a list of URDF asset references against a Unity-style project:
- package:// references (asset tree first, then the ROS package index)
- file:// references
- relative and legacy ../ references

Example:
    python examples/01_resolve_uris.py --project ~/UnityProject --root Assets/Robots/ur5 \
        package://ur_description/meshes/base.stl ../ur_description/urdf/ur5.urdf
"""

import sys
import argparse
import logging
from pathlib import Path

# Add project root to path
sys.path.append(str(Path(__file__).parent.parent))

from urdfpath import LocalAssetHost, PathResolver
from urdfpath.core.config import load_config


def main():
    parser = argparse.ArgumentParser(description="Resolve URDF asset references")
    parser.add_argument("uris", nargs="+", help="Asset references to resolve")
    parser.add_argument("--project", default=".", help="Project directory containing Assets/")
    parser.add_argument("--root", default="Assets/URDF", help="Package root inside the asset tree")
    parser.add_argument("--config", default=None, help="Optional YAML config file")
    parser.add_argument("--no-prefab", action="store_true", help="Keep original mesh extensions")
    parser.add_argument("--set", action="append", default=[], dest="overrides", help="Config override (e.g. resolver.prefab_extension=.asset)")
    args = parser.parse_args()

    logging.basicConfig(level=logging.INFO, format="%(levelname)s %(name)s: %(message)s")

    cfg = load_config(args.config, args.overrides)
    host = LocalAssetHost(Path(args.project) / "Assets")
    resolver = PathResolver(host, cfg)
    resolver.set_package_root(args.root)

    missing = 0
    for uri in args.uris:
        result = resolver.resolve(uri, convert_to_prefab=not args.no_prefab)
        if not result.found:
            missing += 1
            print(f"{uri}\n  -> NOT FOUND (package '{result.missing_package}')")
            continue
        kind = "file" if result.is_file_uri else "external" if result.is_external else "asset"
        print(f"{uri}\n  -> [{kind}] {result.path}")

    return 1 if missing else 0


if __name__ == "__main__":
    sys.exit(main())
