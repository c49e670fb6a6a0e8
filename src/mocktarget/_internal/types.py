"""Shared type aliases used across mocktarget modules."""

from collections.abc import Callable
from typing import Any, TypeAlias

# Endpoint handler: function with variable, injected signature
Handler: TypeAlias = Callable[..., Any]

# Error handler: receives (request, error?) and returns a response value
ErrorHandler: TypeAlias = Callable[..., Any]

# Lifecycle hook: zero-argument sync or async callable
Hook: TypeAlias = Callable[[], Any]
