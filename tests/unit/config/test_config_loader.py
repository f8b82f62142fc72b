"""Unit tests for configuration models and loading."""

import json

from pydantic import ValidationError
import pytest

from clipgraph.core.config import (
    AppConfig,
    CatalogConfig,
    ExportConfig,
    TransitionConfig,
    detect_format,
    load_app_config,
    load_config,
)


class TestDetectFormat:
    """Test format detection from file extensions."""

    @pytest.mark.parametrize(
        ("name", "fmt"),
        [("a.json", "json"), ("a.yaml", "yaml"), ("a.YML", "yaml")],
    )
    def test_known(self, name, fmt):
        assert detect_format(name) == fmt

    def test_unknown(self):
        with pytest.raises(ValueError, match="Unsupported"):
            detect_format("a.toml")


class TestLoadConfig:
    """Test raw config loading."""

    def test_yaml(self, tmp_path):
        path = tmp_path / "c.yaml"
        path.write_text("transitions:\n  blend_duration: 0.5\n", encoding="utf-8")
        assert load_config(path) == {"transitions": {"blend_duration": 0.5}}

    def test_empty_yaml_is_empty_dict(self, tmp_path):
        path = tmp_path / "c.yaml"
        path.write_text("", encoding="utf-8")
        assert load_config(path) == {}

    def test_json(self, tmp_path):
        path = tmp_path / "c.json"
        path.write_text(json.dumps({"export": {"format": "yaml"}}), encoding="utf-8")
        assert load_config(path) == {"export": {"format": "yaml"}}

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            load_config(tmp_path / "missing.yaml")

    def test_invalid_json(self, tmp_path):
        path = tmp_path / "c.json"
        path.write_text("{not json", encoding="utf-8")
        with pytest.raises(ValueError, match="Invalid JSON"):
            load_config(path)

    def test_invalid_yaml(self, tmp_path):
        path = tmp_path / "c.yaml"
        path.write_text("a: [unclosed\n", encoding="utf-8")
        with pytest.raises(ValueError, match="Invalid YAML"):
            load_config(path)

    def test_non_mapping_root(self, tmp_path):
        path = tmp_path / "c.yaml"
        path.write_text("- 1\n- 2\n", encoding="utf-8")
        with pytest.raises(ValueError, match="mapping"):
            load_config(path)


class TestConfigModels:
    """Test model defaults and validation."""

    def test_defaults(self):
        config = AppConfig()

        assert config.transitions.blend_duration == 0.25
        assert config.export.format == "json"
        assert config.logging.level == "INFO"
        assert ".bvh" in config.catalog.extensions

    def test_extensions_normalized(self):
        config = CatalogConfig(extensions=["FBX", ".Bvh", "fbx"])
        assert config.extensions == [".fbx", ".bvh"]

    def test_empty_extensions_rejected(self):
        with pytest.raises(ValidationError):
            CatalogConfig(extensions=[" "])

    def test_negative_blend_rejected(self):
        with pytest.raises(ValidationError):
            TransitionConfig(blend_duration=-1.0)

    def test_bad_export_format(self):
        with pytest.raises(ValidationError):
            ExportConfig(format="xml")  # type: ignore[arg-type]

    def test_unknown_keys_ignored(self):
        config = AppConfig.model_validate({"future_option": True})
        assert config == AppConfig()


class TestLoadAppConfig:
    """Test application config loading."""

    def test_missing_default_uses_defaults(self, tmp_path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        assert load_app_config() == AppConfig()

    def test_default_file_picked_up(self, tmp_path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        (tmp_path / "clipgraph.yaml").write_text(
            "export:\n  format: yaml\n", encoding="utf-8"
        )
        assert load_app_config().export.format == "yaml"

    def test_explicit_path(self, tmp_path):
        path = tmp_path / "custom.json"
        path.write_text(
            json.dumps({"catalog": {"clip_dir": "clips", "recursive": False}}), encoding="utf-8"
        )

        config = load_app_config(path)

        assert config.catalog.clip_dir == "clips"
        assert config.catalog.recursive is False

    def test_explicit_missing_path(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            load_app_config(tmp_path / "nope.yaml")

    def test_invalid_values(self, tmp_path):
        path = tmp_path / "bad.yaml"
        path.write_text("logging:\n  level: LOUD\n", encoding="utf-8")
        with pytest.raises(ValidationError):
            load_app_config(path)
