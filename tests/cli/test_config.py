"""Tests for config loading and validation."""

from pathlib import Path

import pytest

from cli.config import find_config, load_config_model
from cli.config_models import BotConfig


class TestFindConfig:
    def test_env_override(self, monkeypatch, tmp_path):
        monkeypatch.setenv("VYLOBOT_CONFIG", str(tmp_path / "x.yaml"))
        assert find_config() == tmp_path / "x.yaml"

    def test_cwd(self, monkeypatch, tmp_path):
        monkeypatch.delenv("VYLOBOT_CONFIG", raising=False)
        monkeypatch.chdir(tmp_path)
        (tmp_path / "config.yaml").write_text("{}")
        assert find_config() == tmp_path / "config.yaml"


class TestLoadConfigModel:
    def test_defaults_when_missing(self, tmp_path):
        config = load_config_model(tmp_path / "missing.yaml")
        assert config.llm.enabled is False
        assert config.matching.product_threshold == 0.6
        assert config.session.timeout_seconds == 600

    def test_values_from_yaml(self, tmp_path):
        path = tmp_path / "config.yaml"
        path.write_text(
            "paths:\n  data_dir: /srv/vylo\n"
            "owner:\n  owner_ids: 6281100000111\n"
            "matching:\n  confusable_pairs: [[viu, vidio]]\n"
        )
        config = load_config_model(path)
        assert config.paths.products_dir == Path("/srv/vylo/products")
        assert config.owner.owner_ids == ["6281100000111"]
        assert config.matching.confusable_pairs == [("viu", "vidio")]

    def test_invalid_yaml(self, tmp_path):
        path = tmp_path / "config.yaml"
        path.write_text("paths: [unclosed")
        with pytest.raises(ValueError, match="Invalid YAML"):
            load_config_model(path)

    def test_not_a_mapping(self, tmp_path):
        path = tmp_path / "config.yaml"
        path.write_text("- a\n- b\n")
        with pytest.raises(ValueError, match="mapping"):
            load_config_model(path)

    def test_validation_error(self, tmp_path):
        path = tmp_path / "config.yaml"
        path.write_text("matching:\n  weak_threshold: 0.9\n")
        with pytest.raises(ValueError, match="Config validation failed"):
            load_config_model(path)


class TestBotConfig:
    def test_threshold_range(self):
        with pytest.raises(ValueError):
            BotConfig.from_dict({"matching": {"faq_threshold": 1.5}})

    def test_unknown_provider(self):
        with pytest.raises(ValueError):
            BotConfig.from_dict({"llm": {"provider": "claude"}})

    def test_log_level_normalized(self):
        assert BotConfig.from_dict({"logging": {"level": "debug"}}).logging.level == "DEBUG"

    def test_session_values_positive(self):
        with pytest.raises(ValueError):
            BotConfig.from_dict({"session": {"timeout_seconds": 0}})

    def test_api_key_env_expansion(self, monkeypatch):
        monkeypatch.setenv("GOOGLE_API_KEY", "AIza-from-env")
        config = BotConfig.from_dict({"llm": {"api_key": "${GOOGLE_API_KEY}"}})
        assert config.llm.api_key == "AIza-from-env"

    def test_round_trip(self):
        config = BotConfig.from_dict({"variant_seed": 5})
        assert BotConfig.from_dict(config.to_dict()).variant_seed == 5
