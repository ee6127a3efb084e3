"""Call sync or async handlers uniformly.

Handlers may be ``def`` or ``async def``; the dispatcher awaits the
result only when it is awaitable::

    result = await invoke(handler, request)
"""

import inspect
from typing import Any


async def invoke(handler: Any, *args: Any, **kwargs: Any) -> Any:
    """Call *handler* and await the result if it is a coroutine."""
    result = handler(*args, **kwargs)
    if inspect.isawaitable(result):
        result = await result
    return result
