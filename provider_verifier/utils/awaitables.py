import functools
import inspect
from typing import Any, Callable


async def call_maybe_async(fn: Callable[..., Any], *args: Any) -> Any:
    """Calls a sync or async callable and returns its result, awaiting it if needed."""
    result = fn(*args)
    if inspect.isawaitable(result):
        return await result
    return result


def callable_name(fn: Any) -> str:
    """A readable name for a hook, handler or rule, used in logs and error messages."""
    if isinstance(fn, functools.partial):
        return callable_name(fn.func)
    return getattr(fn, "__qualname__", None) or getattr(fn, "__name__", None) or repr(fn)
