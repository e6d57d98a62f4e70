"""
Interfaces module - human communication adapters.

Adapters:
- terminal: Line-oriented prompts on stdin/stdout

All interfaces implement the Interface protocol for unified handling.
"""

from learning_agent.interfaces.base import Interface, MessageKind
from learning_agent.interfaces.terminal import TerminalInterface

__all__ = ["Interface", "MessageKind", "TerminalInterface"]
