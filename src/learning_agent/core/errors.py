"""Exception hierarchy."""


class LearningAgentError(Exception):
    """Base class for all learning agent errors."""


class ConfigurationError(LearningAgentError):
    """Required setting absent or malformed. Fatal at startup."""


class StoreError(LearningAgentError):
    """Memory store unreachable, misconfigured or failed to write."""


class AgentError(LearningAgentError):
    """Search agent run failed (tool, model or network failure)."""
