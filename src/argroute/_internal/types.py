"""Shared type aliases used across argroute modules."""

from collections.abc import Callable
from typing import Any, TypeAlias

# Command handler — receives the Request, its return value is relayed to the caller
Handler: TypeAlias = Callable[..., Any]
