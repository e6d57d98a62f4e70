"""
Shared type definitions.

Core data structures used across modules.
"""

from dataclasses import dataclass
from typing import Any


@dataclass
class ActionResult:
    """Result of an executed tool call."""

    success: bool
    data: Any = None
    error: str | None = None
