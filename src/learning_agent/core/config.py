"""
Configuration management.

Two sources, both read once at startup:
- Settings: environment variables and .env file (prefix LEARNING_AGENT_)
- AgentConfig: model and search behaviour from agent.yaml
"""

from dataclasses import dataclass
from pathlib import Path
from typing import Any

import yaml
from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from learning_agent.core.errors import ConfigurationError

DEFAULT_MAX_ATTEMPTS = 3
DEFAULT_BACKOFF_SECONDS = 1.0
DEFAULT_MAX_ITERATIONS = 15

# The search agent is a zero-shot ReAct chat agent; no other type is implemented
SUPPORTED_AGENT_TYPES = ("chat-zero-shot-react-description",)


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_prefix="LEARNING_AGENT_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Memory
    collection_name: str = Field(default="", description="Name of the brain collection")
    data_dir: Path = Field(default=Path("data"), description="Data storage directory")
    db_name: str = Field(default="brain.db", description="SQLite database name")

    # Providers
    openai_api_key: str = Field(default="", description="OpenAI API key (chat + embeddings)")
    embedding_model: str = Field(
        default="text-embedding-ada-002", description="Embedding model name"
    )
    serpapi_api_key: str = Field(default="", description="SerpAPI key, enables web search")

    agent_config_path: Path = Field(
        default=Path("agent.yaml"), description="Agent configuration file"
    )

    @property
    def db_path(self) -> Path:
        return self.data_dir / self.db_name

    def require_collection_name(self) -> str:
        """Return the collection name or fail before the loop starts."""
        name = self.collection_name.strip()
        if not name:
            raise ConfigurationError(
                "Collection name not set. Set LEARNING_AGENT_COLLECTION_NAME in .env"
            )
        return name


def get_settings() -> Settings:
    """Get settings instance."""
    return Settings()


@dataclass(frozen=True)
class AgentConfig:
    """Immutable agent configuration, passed by reference to every component."""

    model: str
    recall_temperature: float
    search_temperature: float
    agent_type: str
    search_max_attempts: int | None = DEFAULT_MAX_ATTEMPTS  # None = retry forever
    search_backoff_seconds: float = DEFAULT_BACKOFF_SECONDS
    max_iterations: int = DEFAULT_MAX_ITERATIONS

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "AgentConfig":
        """
        Build config from the parsed agent.yaml document.

        Raises:
            ConfigurationError: If a required field is missing or malformed
        """
        if not isinstance(data, dict):
            raise ConfigurationError("Agent config must be a mapping")

        openai = _section(data, "openai")
        temperature = _section(openai, "temperature", prefix="openai.")
        langchain = _section(data, "langchain")
        search = data.get("search") or {}
        if not isinstance(search, dict):
            raise ConfigurationError("'search' must be a mapping")

        max_attempts = search.get("max_attempts", DEFAULT_MAX_ATTEMPTS)
        if max_attempts is not None:
            max_attempts = _as_int(max_attempts, "search.max_attempts")
            if max_attempts < 1:
                raise ConfigurationError("search.max_attempts must be >= 1 or null")

        return cls(
            model=str(_required(openai, "model", "openai.model")),
            recall_temperature=_as_float(
                _required(temperature, "recall", "openai.temperature.recall"),
                "openai.temperature.recall",
            ),
            search_temperature=_as_float(
                _required(temperature, "search", "openai.temperature.search"),
                "openai.temperature.search",
            ),
            agent_type=_agent_type(_required(langchain, "agent", "langchain.agent")),
            search_max_attempts=max_attempts,
            search_backoff_seconds=_as_float(
                search.get("backoff_seconds", DEFAULT_BACKOFF_SECONDS),
                "search.backoff_seconds",
            ),
            max_iterations=_as_int(
                search.get("max_iterations", DEFAULT_MAX_ITERATIONS), "search.max_iterations"
            ),
        )


def load_agent_config(path: Path | str) -> AgentConfig:
    """Parse agent.yaml into an AgentConfig."""
    path = Path(path)
    try:
        with open(path, encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except FileNotFoundError as e:
        raise ConfigurationError(f"Agent config not found at {path}") from e
    except yaml.YAMLError as e:
        raise ConfigurationError(f"Invalid agent config {path}: {e}") from e

    return AgentConfig.from_dict(data or {})


def _section(data: dict[str, Any], key: str, prefix: str = "") -> dict[str, Any]:
    value = data.get(key)
    if not isinstance(value, dict):
        raise ConfigurationError(f"Missing required section '{prefix}{key}' in agent config")
    return value


def _required(data: dict[str, Any], key: str, path: str) -> Any:
    if data.get(key) is None:
        raise ConfigurationError(f"Missing required setting '{path}' in agent config")
    return data[key]


def _as_float(value: Any, path: str) -> float:
    try:
        return float(value)
    except (TypeError, ValueError) as e:
        raise ConfigurationError(f"'{path}' must be a number, got {value!r}") from e


def _as_int(value: Any, path: str) -> int:
    if isinstance(value, bool):
        raise ConfigurationError(f"'{path}' must be an integer, got {value!r}")
    try:
        return int(value)
    except (TypeError, ValueError) as e:
        raise ConfigurationError(f"'{path}' must be an integer, got {value!r}") from e


def _agent_type(value: Any) -> str:
    agent_type = str(value)
    if agent_type not in SUPPORTED_AGENT_TYPES:
        supported = ", ".join(SUPPORTED_AGENT_TYPES)
        raise ConfigurationError(
            f"Unsupported langchain.agent {agent_type!r} (supported: {supported})"
        )
    return agent_type
