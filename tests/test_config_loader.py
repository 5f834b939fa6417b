"""
Tests for configuration loading in prompt_sync/config_loader.py
"""

import copy
import pytest
import sys
import os

sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from prompt_sync.config_loader import DEFAULT_CONFIG, _apply_env_overrides, _deep_merge, load_config
from prompt_sync.prompt_constants import load_prompt_constants


class TestLoadConfig:
    """Tests for load_config function."""

    def test_missing_file_uses_defaults(self, tmp_path, monkeypatch):
        """Test defaults when config.yaml is absent."""
        monkeypatch.delenv("PROMPTSYNC_SERVER_PORT", raising=False)
        config = load_config(str(tmp_path / "missing.yaml"))
        assert config["prompt"]["char_budget"] == 380
        assert config["server"]["port"] == DEFAULT_CONFIG["server"]["port"]

    def test_yaml_overrides(self, tmp_path):
        """Test YAML values merge over defaults."""
        path = tmp_path / "config.yaml"
        path.write_text("prompt:\n  char_budget: 500\n", encoding="utf-8")
        config = load_config(str(path))
        assert config["prompt"]["char_budget"] == 500
        assert "lighting" in config["prompt"]["presets"]

    def test_broken_yaml_falls_back(self, tmp_path):
        """Test unparseable YAML is ignored."""
        path = tmp_path / "config.yaml"
        path.write_text("prompt: [unclosed\n", encoding="utf-8")
        config = load_config(str(path))
        assert config["prompt"]["char_budget"] == 380

    def test_defaults_not_mutated(self, tmp_path):
        """Test loading never changes DEFAULT_CONFIG."""
        path = tmp_path / "config.yaml"
        path.write_text("prompt:\n  presets:\n    lighting:\n      text: Rim Light\n", encoding="utf-8")
        load_config(str(path))
        assert DEFAULT_CONFIG["prompt"]["presets"]["lighting"]["text"].startswith("Natural Lighting")


class TestEnvOverrides:
    """Tests for _apply_env_overrides function."""

    def test_int_conversion(self):
        """Test integer settings are converted."""
        config = copy.deepcopy(DEFAULT_CONFIG)
        config = _apply_env_overrides(config, {"PROMPTSYNC_SERVER_PORT": "9000"})
        assert config["server"]["port"] == 9000

    def test_key_with_underscores(self):
        """Test multi-word keys are matched."""
        config = copy.deepcopy(DEFAULT_CONFIG)
        config = _apply_env_overrides(config, {"PROMPTSYNC_PROMPT_CHAR_BUDGET": "120"})
        assert config["prompt"]["char_budget"] == 120

    def test_bad_value_ignored(self):
        """Test a non-numeric value leaves the default."""
        config = copy.deepcopy(DEFAULT_CONFIG)
        config = _apply_env_overrides(config, {"PROMPTSYNC_SERVER_PORT": "lots"})
        assert config["server"]["port"] == 8000

    def test_unknown_keys_ignored(self):
        """Test unrelated variables are skipped."""
        config = copy.deepcopy(DEFAULT_CONFIG)
        config = _apply_env_overrides(config, {"PROMPTSYNC_NOPE_KEY": "x", "OTHER_SERVER_PORT": "1"})
        assert config["server"]["port"] == 8000


class TestPromptConstants:
    """Tests for load_prompt_constants function."""

    def test_defaults(self):
        """Test the built-in literals."""
        constants = load_prompt_constants()
        assert constants.char_budget == 380
        assert constants.preset_text("polish").endswith("in a symbolic and meaningful style, 8K")
        assert constants.presets["lighting"].text == (
            "Natural Lighting, Studio lighting, Cinematic Lighting, Crepuscular Rays, X-Ray, Backlight"
        )

    def test_partial_section(self):
        """Test a partial prompt section keeps the other defaults."""
        constants = load_prompt_constants({"prompt": {"char_budget": 200}})
        assert constants.char_budget == 200
        assert "bad anatomy" in constants.negative_text

    def test_over_budget(self):
        """Test the budget comparison is strict."""
        constants = load_prompt_constants()
        assert not constants.is_over_budget(380)
        assert constants.is_over_budget(381)


class TestDeepMerge:
    """Tests for _deep_merge function."""

    def test_nested_merge(self):
        """Test nested dicts merge key by key."""
        result = _deep_merge({"a": {"x": 1, "y": 2}, "b": 1}, {"a": {"y": 3}})
        assert result == {"a": {"x": 1, "y": 3}, "b": 1}

    def test_non_dict_replaces(self):
        """Test scalars and lists replace wholesale."""
        result = _deep_merge({"a": [1, 2]}, {"a": [3]})
        assert result == {"a": [3]}
