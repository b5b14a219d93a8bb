"""
Unit tests for Config.
"""

import pytest
import yaml

from photoclassifier.core.config import DEFAULTS, Config, env_overrides, merge, parse_env_value
from photoclassifier.core.labels import CLASSES


@pytest.fixture
def config_dir(tmp_path, monkeypatch):
    """Configuration directory with a default and a test environment file."""
    for key in ("PHOTOCLASSIFIER_ENV", "PHOTOCLASSIFIER_MODEL_PATH", "PHOTOCLASSIFIER_MODEL_SIZE"):
        monkeypatch.delenv(key, raising=False)

    default = {
        "model": {"path": "models/model.tflite", "size": 224, "threads": 2},
        "display": {"scale": 3.0, "palette": ["#FFA500", "#0000FF"]},
        "camera": {"source": 0},
    }
    (tmp_path / "default.yaml").write_text(yaml.safe_dump(default), encoding="utf-8")
    (tmp_path / "testing.yaml").write_text(
        yaml.safe_dump({"model": {"threads": 4}, "camera": {"source": "clip.mp4"}}),
        encoding="utf-8",
    )
    return tmp_path


class TestConfig:
    def test_loads_default(self, config_dir):
        config = Config(config_dir)

        assert config.get("model.path") == "models/model.tflite"
        assert config.get("model.size") == 224
        assert config["display"]["scale"] == 3.0

    def test_missing_key_default(self, config_dir):
        config = Config(config_dir)

        assert config.get("model.missing", 7) == 7
        assert config.get("model.path.deeper", "x") == "x"
        assert config["nothing"] == {}

    def test_environment_file_merged(self, config_dir, monkeypatch):
        monkeypatch.setenv("PHOTOCLASSIFIER_ENV", "testing")

        config = Config(config_dir)

        assert config.env == "testing"
        assert config.get("model.threads") == 4
        assert config.get("model.path") == "models/model.tflite"
        assert config.get("camera.source") == "clip.mp4"

    def test_env_var_override(self, config_dir, monkeypatch):
        monkeypatch.setenv("PHOTOCLASSIFIER_MODEL_PATH", "/data/other.tflite")
        monkeypatch.setenv("PHOTOCLASSIFIER_MODEL_SIZE", "192")

        config = Config(config_dir)

        assert config.get("model.path") == "/data/other.tflite"
        assert config.get("model.size") == 192

    def test_builtin_defaults_fill_gaps(self, config_dir):
        config = Config(config_dir)

        assert config.get("labels") == list(CLASSES)
        assert config.get("display.radius") == 15
        assert config.get("camera.warmup") == 5

    def test_env_list_override(self, config_dir, monkeypatch):
        monkeypatch.setenv("PHOTOCLASSIFIER_LABELS", "[apple, banana]")

        assert Config(config_dir).get("labels") == ["apple", "banana"]

    def test_missing_directory(self, tmp_path, monkeypatch):
        monkeypatch.delenv("PHOTOCLASSIFIER_ENV", raising=False)
        config = Config(tmp_path / "absent")
        assert config.get("model.size", 224) == 224

    def test_reload(self, config_dir, monkeypatch):
        config = Config(config_dir)
        monkeypatch.setenv("PHOTOCLASSIFIER_MODEL_PATH", "reloaded.tflite")

        config.reload()

        assert config.get("model.path") == "reloaded.tflite"

    def test_as_dict_is_copy(self, config_dir):
        config = Config(config_dir)
        data = config.as_dict
        data["model"] = None
        data["display"]["palette"].append("#000000")
        assert config.get("display.palette") == ["#FFA500", "#0000FF"]

    def test_project_default_file(self, monkeypatch):
        """The shipped config/default.yaml lists one label per model output."""
        monkeypatch.delenv("PHOTOCLASSIFIER_ENV", raising=False)
        config = Config()

        assert config.get("model.size") == 224
        assert len(config.get("labels")) == 12


class TestParseEnvValue:
    @pytest.mark.parametrize(
        "raw, parsed",
        [
            ("true", True),
            ("False", False),
            ("12", 12),
            ("2.5", 2.5),
            ("hello", "hello"),
            ("/data/model.tflite", "/data/model.tflite"),
            ("", ""),
            ("[a, b]", ["a", "b"]),
        ],
    )
    def test_values(self, raw, parsed):
        assert parse_env_value(raw) == parsed

    def test_invalid_yaml_kept_as_text(self):
        assert parse_env_value("[unclosed") == "[unclosed"


class TestEnvOverrides:
    def test_section_and_key(self):
        environ = {
            "PHOTOCLASSIFIER_MODEL_PATH": "m.tflite",
            "PHOTOCLASSIFIER_MODEL_SIZE": "192",
            "PHOTOCLASSIFIER_LOGGING_LEVEL": "DEBUG",
            "HOME": "/root",
        }

        assert env_overrides(environ) == {
            "model": {"path": "m.tflite", "size": 192},
            "logging": {"level": "DEBUG"},
        }

    def test_env_selector_ignored(self):
        assert env_overrides({"PHOTOCLASSIFIER_ENV": "production"}) == {}

    def test_top_level_entry(self):
        assert env_overrides({"PHOTOCLASSIFIER_LABELS": "[x]"}) == {"labels": ["x"]}


class TestMerge:
    def test_nested_sections_merge(self):
        merged = merge({"model": {"path": "a", "size": 224}}, {"model": {"size": 192}})
        assert merged == {"model": {"path": "a", "size": 192}}

    def test_lists_replaced(self):
        merged = merge({"labels": ["a", "b"]}, {"labels": ["c"]})
        assert merged == {"labels": ["c"]}

    def test_inputs_untouched(self):
        base = {"model": {"size": 224}}
        merge(base, {"model": {"size": 192}})
        assert base == {"model": {"size": 224}}
        assert DEFAULTS["model"]["size"] == 224
