from .awaitables import call_maybe_async, callable_name

__all__ = ["call_maybe_async", "callable_name"]
