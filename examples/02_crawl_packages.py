"""
ROS Package Discovery Example

Crawls the package search roots (ROS_PACKAGE_PATH, or the fallback roots)
for package.xml manifests and prints the resulting package index.
"""

import sys
import argparse
import logging
from pathlib import Path

# Add project root to path
sys.path.append(str(Path(__file__).parent.parent))

from urdfpath.core.hooks import EventType, HookManager
from urdfpath.discovery import PackageIndex


def main():
    parser = argparse.ArgumentParser(description="Crawl ROS package manifests")
    parser.add_argument("roots", nargs="*", help="Search roots (default: derived from environment)")
    parser.add_argument("--verbose", action="store_true", help="Show debug logs")
    args = parser.parse_args()

    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.WARN)

    skipped = []
    hooks = HookManager()
    hooks.register(
        EventType.ON_MANIFEST_SKIPPED,
        lambda manifest, reason: skipped.append((manifest, reason)),
    )

    index = PackageIndex(search_roots=args.roots or None, hooks=hooks)
    index.crawl()

    print(f"Searched: {', '.join(index.last_search_roots) or '(none)'}")
    for name, path in sorted(index.items()):
        print(f"  {name:40s} {path}")
    print(f"{len(index)} package(s) indexed, {len(skipped)} manifest(s) skipped")
    for manifest, reason in skipped:
        print(f"  skipped {manifest}: {reason}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
