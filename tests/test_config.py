"""Tests for config loading."""

import pytest

from proofline.config import AppConfig, LLMConfig, StoreConfig, load_config


class TestConfig:
    def test_defaults(self):
        config = AppConfig()
        assert config.llm.model == "claude-haiku-4-5-20251001"
        assert config.editor.poll_interval == 30.0
        assert config.editor.idle_delay == 2.0
        assert config.editor.history_limit == 10
        assert config.readability.min_ai_chars == 200

    def test_load_config_defaults(self, tmp_path):
        """Loading from non-existent path returns defaults."""
        config = load_config(tmp_path / "nonexistent.yaml")
        assert config.llm.long_text_timeout == 20.0

    def test_load_config_from_yaml(self, tmp_path):
        yaml_path = tmp_path / "config.yaml"
        yaml_path.write_text(
            "llm:\n  model: test-model\neditor:\n  poll_interval: 5\n"
        )
        config = load_config(yaml_path)
        assert config.llm.model == "test-model"
        assert config.editor.poll_interval == 5
        # Defaults for unspecified
        assert config.editor.idle_delay == 2.0
        assert config.readability.min_summary_words == 50

    def test_empty_yaml_uses_defaults(self, tmp_path):
        yaml_path = tmp_path / "config.yaml"
        yaml_path.write_text("")
        assert load_config(yaml_path) == AppConfig()

    def test_store_resolved_path(self):
        store = StoreConfig(db_path="~/test.db")
        assert "~" not in str(store.resolved_db_path)

    def test_frozen_config(self):
        config = LLMConfig()
        with pytest.raises(AttributeError):
            config.model = "changed"


class TestDeadline:
    def test_short_text_gets_short_deadline(self):
        assert LLMConfig().deadline_for("short text") == 15.0

    def test_long_text_gets_long_deadline(self):
        assert LLMConfig().deadline_for("x" * 2001) == 20.0

    def test_threshold_is_exclusive(self):
        assert LLMConfig().deadline_for("x" * 2000) == 15.0
