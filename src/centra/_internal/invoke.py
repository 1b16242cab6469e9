"""Invoke helper — call sync or async endpoints uniformly.

Endpoints wrapped by ``App`` can be ``def`` or ``async def``; the
sync/async check lives here and nowhere else.
"""

import inspect
from typing import Any


async def invoke(handler: Any, *args: Any, **kwargs: Any) -> Any:
    """Call a handler and await the result if it's a coroutine."""
    result = handler(*args, **kwargs)
    if inspect.isawaitable(result):
        result = await result
    return result
