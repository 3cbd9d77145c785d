"""
Tests for configuration loading.
"""

import pytest
from omegaconf import OmegaConf

from urdfpath.core.config import default_config, load_config, resolve_config


class TestLoadConfig:
    """Tests for load_config()."""

    def test_defaults(self):
        """Test default values."""
        cfg = load_config()
        assert cfg.discovery.package_path_env == "ROS_PACKAGE_PATH"
        assert cfg.discovery.manifest_name == "package.xml"
        assert list(cfg.discovery.fallback_search_roots) == ["/opt/ros/noetic/share/"]
        assert cfg.resolver.material_folder == "Materials"
        assert list(cfg.resolver.prefab_source_extensions) == [".stl"]

    def test_yaml_file_merged_over_defaults(self, tmp_path):
        """Test YAML values override defaults while other keys survive."""
        config_file = tmp_path / "importer.yaml"
        config_file.write_text("discovery:\n  fallback_search_roots: [/opt/ros/humble/share/]\n")

        cfg = load_config(config_file)
        assert list(cfg.discovery.fallback_search_roots) == ["/opt/ros/humble/share/"]
        assert cfg.discovery.manifest_name == "package.xml"

    def test_dotlist_overrides(self):
        """Test dotlist overrides are applied last."""
        cfg = load_config(overrides=["resolver.prefab_extension=.asset"])
        assert cfg.resolver.prefab_extension == ".asset"

    def test_missing_file_raises(self, tmp_path):
        """Test a missing config file raises."""
        with pytest.raises(FileNotFoundError, match="Config file not found"):
            load_config(tmp_path / "nope.yaml")


class TestResolveConfig:
    """Tests for resolve_config()."""

    def test_none_gives_defaults(self):
        assert resolve_config(None) == default_config()

    def test_partial_config(self):
        """Test a partial config keeps defaults for unset keys."""
        cfg = resolve_config(OmegaConf.create({"resolver": {"material_folder": "Mats"}}))
        assert cfg.resolver.material_folder == "Mats"
        assert cfg.resolver.material_extension == ".mat"

    def test_default_config_is_fresh_copy(self):
        """Test mutating one default config doesn't leak into the next."""
        cfg = default_config()
        cfg.resolver.material_folder = "Changed"
        assert default_config().resolver.material_folder == "Materials"
