"""
Core module - configuration, errors, the question loop.

Components:
- config: Settings via pydantic-settings, agent config via agent.yaml
- errors: Exception hierarchy
- retry: Retry policy for the search path
- loop: Ask / recall / search / review state machine
- logging: Structured logging setup
"""

from learning_agent.core.config import AgentConfig, Settings
from learning_agent.core.errors import AgentError, ConfigurationError, LearningAgentError, StoreError

__all__ = [
    "AgentConfig",
    "AgentError",
    "ConfigurationError",
    "LearningAgentError",
    "Settings",
    "StoreError",
]
