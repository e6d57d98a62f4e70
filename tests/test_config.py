"""Tests for configuration module."""

from pathlib import Path

import pytest

from learning_agent.core.config import AgentConfig, Settings, load_agent_config
from learning_agent.core.errors import ConfigurationError

VALID_YAML = """
openai:
  model: gpt-3.5-turbo
  temperature:
    recall: 0
    search: 0.5
langchain:
  agent: chat-zero-shot-react-description
"""


def test_default_settings():
    """Settings load with defaults."""
    settings = Settings(
        _env_file=None,  # Don't load .env in tests
    )
    assert settings.data_dir == Path("data")
    assert settings.collection_name == ""
    assert settings.serpapi_api_key == ""


def test_db_path():
    """Database path combines data_dir and db_name."""
    settings = Settings(
        data_dir=Path("/tmp/test"),
        db_name="test.db",
        _env_file=None,
    )
    assert settings.db_path == Path("/tmp/test/test.db")


def test_collection_name_from_env(monkeypatch):
    monkeypatch.setenv("LEARNING_AGENT_COLLECTION_NAME", "my-brain")
    settings = Settings(_env_file=None)
    assert settings.require_collection_name() == "my-brain"


def test_missing_collection_name_is_fatal():
    settings = Settings(collection_name="  ", _env_file=None)
    with pytest.raises(ConfigurationError, match="COLLECTION_NAME"):
        settings.require_collection_name()


def test_load_agent_config(tmp_path: Path):
    path = tmp_path / "agent.yaml"
    path.write_text(VALID_YAML)

    config = load_agent_config(path)

    assert config.model == "gpt-3.5-turbo"
    assert config.recall_temperature == 0.0
    assert config.search_temperature == 0.5
    assert config.agent_type == "chat-zero-shot-react-description"
    # search section is optional
    assert config.search_max_attempts == 3
    assert config.max_iterations == 15


def test_agent_config_is_immutable(tmp_path: Path):
    path = tmp_path / "agent.yaml"
    path.write_text(VALID_YAML)
    config = load_agent_config(path)

    with pytest.raises(AttributeError):
        config.model = "other"  # type: ignore[misc]


def test_unbounded_retry_from_null():
    config = AgentConfig.from_dict(
        {
            "openai": {"model": "m", "temperature": {"recall": 0, "search": 0}},
            "langchain": {"agent": "chat-zero-shot-react-description"},
            "search": {"max_attempts": None, "backoff_seconds": 0},
        }
    )
    assert config.search_max_attempts is None
    assert config.search_backoff_seconds == 0.0


@pytest.mark.parametrize(
    "data, missing",
    [
        ({"langchain": {"agent": "a"}}, "openai"),
        ({"openai": {"temperature": {"recall": 0, "search": 0}}, "langchain": {"agent": "a"}}, "openai.model"),
        ({"openai": {"model": "m", "temperature": {"search": 0}}, "langchain": {"agent": "a"}}, "openai.temperature.recall"),
        ({"openai": {"model": "m", "temperature": {"recall": 0, "search": 0}}}, "langchain"),
    ],
)
def test_missing_required_field(data, missing):
    with pytest.raises(ConfigurationError, match=missing):
        AgentConfig.from_dict(data)


def test_invalid_values():
    base = {
        "openai": {"model": "m", "temperature": {"recall": "hot", "search": 0}},
        "langchain": {"agent": "a"},
    }
    with pytest.raises(ConfigurationError, match="must be a number"):
        AgentConfig.from_dict(base)

    base["openai"]["temperature"]["recall"] = 0
    base["search"] = {"max_attempts": 0}
    with pytest.raises(ConfigurationError, match="max_attempts"):
        AgentConfig.from_dict(base)


def test_unsupported_agent_type():
    data = {
        "openai": {"model": "m", "temperature": {"recall": 0, "search": 0}},
        "langchain": {"agent": "openai-functions"},
    }
    with pytest.raises(ConfigurationError, match="Unsupported langchain.agent .openai-functions."):
        AgentConfig.from_dict(data)


def test_missing_config_file(tmp_path: Path):
    with pytest.raises(ConfigurationError, match="not found"):
        load_agent_config(tmp_path / "nope.yaml")


def test_malformed_yaml(tmp_path: Path):
    path = tmp_path / "agent.yaml"
    path.write_text("openai: [unclosed")
    with pytest.raises(ConfigurationError, match="Invalid agent config"):
        load_agent_config(path)
