"""
Tests for engine config loading and validation.
"""

import pytest

from jobmatch.config import (
    DEFAULT_CONFIG,
    ENGINE_CONFIG_PATH,
    ConfigError,
    EngineConfig,
    Weights,
    config_from_dict,
    load_engine_config,
)


class TestLoadEngineConfig:

    def test_shipped_config_matches_defaults(self):
        assert ENGINE_CONFIG_PATH.exists()
        assert load_engine_config(ENGINE_CONFIG_PATH) == DEFAULT_CONFIG

    def test_missing_file_uses_defaults(self, tmp_path):
        assert load_engine_config(tmp_path / "absent.yaml") is DEFAULT_CONFIG

    def test_empty_file_uses_defaults(self, tmp_path):
        path = tmp_path / "engine.yaml"
        path.write_text("")
        assert load_engine_config(path) is DEFAULT_CONFIG

    def test_partial_file_merges_over_defaults(self, tmp_path):
        path = tmp_path / "engine.yaml"
        path.write_text(
            "weights:\n"
            "  skills: 0.50\n"
            "  experience: 0.15\n"
            "recent_days: 14\n"
        )
        config = load_engine_config(path)
        assert config.weights == Weights(skills=0.50, experience=0.15)
        assert config.recent_days == 14
        assert config.feed_tolerance == DEFAULT_CONFIG.feed_tolerance

    def test_env_override(self, tmp_path, monkeypatch):
        path = tmp_path / "custom.yaml"
        path.write_text("min_score: 75\n")
        monkeypatch.setenv("JOBMATCH_CONFIG", str(path))
        assert load_engine_config().min_score == 75

    def test_non_mapping_rejected(self, tmp_path):
        path = tmp_path / "engine.yaml"
        path.write_text("- skills\n- experience\n")
        with pytest.raises(ConfigError):
            load_engine_config(path)

    def test_invalid_yaml_rejected(self, tmp_path):
        path = tmp_path / "engine.yaml"
        path.write_text("weights: [unclosed\n")
        with pytest.raises(ConfigError):
            load_engine_config(path)


class TestValidation:

    def test_defaults_are_valid(self):
        assert EngineConfig().validate() == DEFAULT_CONFIG

    @pytest.mark.parametrize("data", [
        {"weights": {"skills": 0.9}},
        {"weights": {"skills": -0.1, "experience": 0.75}},
        {"weights": {"culture": 0.1}},
        {"colour": "blue"},
        {"skill_similarity": 1.5},
        {"title_similarity": -0.1},
        {"recent_days": -1},
        {"feed_tolerance": -5},
        {"min_score": 101},
        {"min_score": "high"},
    ])
    def test_rejects_bad_values(self, data):
        with pytest.raises(ConfigError):
            config_from_dict(data)

    def test_config_error_is_value_error(self):
        with pytest.raises(ValueError):
            config_from_dict({"weights": {"skills": 2.0}})

    def test_numeric_strings_are_coerced(self):
        config = config_from_dict({"recent_days": "3", "skill_similarity": "0.8"})
        assert config.recent_days == 3
        assert config.skill_similarity == 0.8
