import re
from typing import Any, Callable

def json_type_name(value: Any) -> str:
    """Name of the JSON type of a decoded JSON value."""
    if value is None:
        return "null"
    if isinstance(value, bool):
        return "boolean"
    if isinstance(value, (int, float)):
        return "number"
    if isinstance(value, str):
        return "string"
    if isinstance(value, (list, tuple)):
        return "array"
    if isinstance(value, dict):
        return "object"
    return type(value).__name__

def _as_text(value: Any) -> str:
    return value if isinstance(value, str) else str(value)

class Comparator:
    def __init__(self, fn: Callable[[Any, Any], bool]):
        self.fn = fn

    def evaluate(self, actual: Any, expected: Any) -> bool:
        return self.fn(actual, expected)

equals = Comparator(lambda actual, expected: json_type_name(actual) == json_type_name(expected) and actual == expected)
same_type = Comparator(lambda actual, expected: json_type_name(actual) == json_type_name(expected))
regex_match = Comparator(lambda actual, pattern: re.fullmatch(pattern, _as_text(actual)) is not None)
includes = Comparator(lambda actual, expected: _as_text(expected) in _as_text(actual))

NAME_TO_COMPARATOR = {
    "equality": equals,
    "type": same_type,
    "regex": regex_match,
    "include": includes,
}
