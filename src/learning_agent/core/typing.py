"""Shared typing aliases used across modules."""

from typing import Any, TypeAlias

MessageDict: TypeAlias = dict[str, Any]
Vector: TypeAlias = list[float]
