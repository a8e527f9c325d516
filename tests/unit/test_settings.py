"""Unit tests for configuration loading and model construction."""

from pathlib import Path

import pytest
from langchain_openai import ChatOpenAI
from pydantic import ValidationError

from conftest import make_settings
from heavyAgent.config import build_settings, load_settings
from heavyAgent.models import build_chat_model, build_model_factory
from heavyAgent.utils.errors import ConfigError

PROJECT_CONFIG = Path(__file__).resolve().parents[2] / "config.yaml"


@pytest.fixture(autouse=True)
def no_env_keys(monkeypatch):
    monkeypatch.delenv("OPENROUTER_API_KEY", raising=False)
    monkeypatch.delenv("OPENAI_API_KEY", raising=False)
    monkeypatch.delenv("OPENROUTER_MODEL", raising=False)
    monkeypatch.delenv("OPENROUTER_BASE_URL", raising=False)


def write_config(tmp_path, text):
    path = tmp_path / "config.yaml"
    path.write_text(text, encoding="utf-8")
    return path


class TestLoadSettings:
    def test_project_config(self):
        """The shipped config.yaml loads with its documented defaults"""
        settings = load_settings(PROJECT_CONFIG)

        assert settings.openrouter.model == "moonshotai/kimi-k2"
        assert settings.openrouter.base_url == "https://openrouter.ai/api/v1"
        assert settings.agent.max_iterations == 10
        assert settings.orchestrator.parallel_agents == 4
        assert settings.orchestrator.task_timeout == 300
        assert settings.orchestrator.enforce_timeout is True
        assert "{user_input}" in settings.orchestrator.question_generation_prompt
        assert "{agent_responses}" in settings.orchestrator.synthesis_prompt
        assert settings.search.max_results == 5

    def test_placeholder_key_is_dropped(self):
        settings = load_settings(PROJECT_CONFIG)

        assert not settings.openrouter.has_api_key

    def test_key_from_environment(self, monkeypatch):
        monkeypatch.setenv("OPENROUTER_API_KEY", "env-key")

        settings = load_settings(PROJECT_CONFIG)

        assert settings.openrouter.api_key == "env-key"

    def test_yaml_key_wins(self, tmp_path, monkeypatch):
        monkeypatch.setenv("OPENROUTER_API_KEY", "env-key")
        path = write_config(tmp_path, "openrouter:\n  api_key: yaml-key\n")

        assert load_settings(path).openrouter.api_key == "yaml-key"

    def test_defaults_for_missing_sections(self, tmp_path):
        path = write_config(tmp_path, "agent:\n  max_iterations: 3\n")

        settings = load_settings(path)

        assert settings.agent.max_iterations == 3
        assert settings.orchestrator.parallel_agents == 4
        assert settings.logging.console_level == "WARNING"

    def test_missing_file(self, tmp_path):
        with pytest.raises(ConfigError, match="Failed to load config from"):
            load_settings(tmp_path / "missing.yaml")

    def test_malformed_yaml(self, tmp_path):
        path = write_config(tmp_path, "agent: [unclosed\n")

        with pytest.raises(ConfigError):
            load_settings(path)

    def test_non_mapping_document(self, tmp_path):
        path = write_config(tmp_path, "- just\n- a list\n")

        with pytest.raises(ConfigError, match="mapping"):
            load_settings(path)

    def test_out_of_range_value(self, tmp_path):
        path = write_config(tmp_path, "orchestrator:\n  parallel_agents: 0\n")

        with pytest.raises(ConfigError):
            load_settings(path)

    def test_template_missing_placeholder(self, tmp_path):
        path = write_config(tmp_path, "orchestrator:\n  synthesis_prompt: 'no placeholders'\n")

        with pytest.raises(ConfigError, match="synthesis_prompt"):
            load_settings(path)


class TestBuildSettings:
    def test_frozen(self):
        settings = make_settings()

        with pytest.raises(ValidationError):
            settings.agent.max_iterations = 99

    def test_log_level_normalized(self):
        settings = make_settings(logging={"level": "debug", "log_to_file": False})

        assert settings.logging.level == "DEBUG"

    def test_unknown_log_level(self):
        with pytest.raises(ValidationError):
            build_settings({"logging": {"level": "LOUD"}})

    def test_generic_env_names_are_ignored(self, monkeypatch):
        """Unprefixed MODEL / BASE_URL / API_KEY variables do not configure the endpoint"""
        monkeypatch.setenv("MODEL", "some/other-model")
        monkeypatch.setenv("BASE_URL", "http://localhost:1234")
        monkeypatch.setenv("API_KEY", "stray-key")

        openrouter = build_settings({"openrouter": {}}).openrouter

        assert openrouter.model == "moonshotai/kimi-k2"
        assert openrouter.base_url == "https://openrouter.ai/api/v1"
        assert not openrouter.has_api_key

    def test_namespaced_env_names(self, monkeypatch):
        monkeypatch.setenv("OPENROUTER_MODEL", "openai/gpt-4o-mini")
        monkeypatch.setenv("OPENAI_API_KEY", "openai-key")

        openrouter = build_settings({"openrouter": {}}).openrouter

        assert openrouter.model == "openai/gpt-4o-mini"
        assert openrouter.api_key == "openai-key"

    def test_yaml_model_wins_over_environment(self, monkeypatch):
        monkeypatch.setenv("OPENROUTER_MODEL", "openai/gpt-4o-mini")

        openrouter = build_settings({"openrouter": {"model": "local-model"}}).openrouter

        assert openrouter.model == "local-model"


class TestModelConstruction:
    def test_chat_model_from_settings(self):
        model = build_chat_model(make_settings())

        assert isinstance(model, ChatOpenAI)
        assert model.model_name == "moonshotai/kimi-k2"

    def test_factory_returns_fresh_clients(self):
        factory = build_model_factory(make_settings())

        assert factory() is not factory()

    def test_missing_key(self):
        settings = build_settings({"openrouter": {"api_key": "YOUR API KEY HERE"}})

        with pytest.raises(ConfigError, match="Missing API key"):
            build_chat_model(settings)
        with pytest.raises(ConfigError):
            build_model_factory(settings)
