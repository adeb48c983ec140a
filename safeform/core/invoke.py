"""Call sync or async callbacks uniformly.

Submit handlers and flow callbacks can be ``def`` or ``async def``:

    result = await invoke(on_submit, data)
"""
from __future__ import annotations

import inspect
from typing import Any


async def invoke(handler: Any, *args: Any, **kwargs: Any) -> Any:
    """Call a handler and await the result if it is awaitable."""
    result = handler(*args, **kwargs)
    if inspect.isawaitable(result):
        result = await result
    return result
