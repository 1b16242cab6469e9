"""Shared type aliases used across centra modules."""

from collections.abc import Callable
from typing import Any, TypeAlias

# Error handler: handler(writer, request, err) -> None, writes the response
ErrorHandler: TypeAlias = Callable[[Any, Any, BaseException | None], None]
