"""
urdfpath Resolver Layer
"""

from urdfpath.resolver.path_resolver import PathResolver

__all__ = ["PathResolver"]
