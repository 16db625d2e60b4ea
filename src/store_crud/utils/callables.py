import inspect
from typing import Any


def callable_name(fn: Any) -> str:
    """Get a readable dotted name for a callback, for log lines."""
    module = getattr(fn, "__module__", None)
    name = getattr(fn, "__qualname__", None) or getattr(fn, "__name__", None)
    if name is None:
        name = type(fn).__qualname__
    return f"{module}.{name}" if module else name


async def resolve(value: Any) -> Any:
    """Await ``value`` if a callback returned an awaitable."""
    if inspect.isawaitable(value):
        return await value
    return value
