import os
from typing import Any, Iterable

from provider_verifier.matching.mismatch import BodyMismatch, BodyTypeMismatch, HeaderMismatch, StatusMismatch


def format_mismatch(mismatch: Any) -> str:
    """Renders one mismatch as a single report line."""
    if isinstance(mismatch, StatusMismatch):
        return f"StatusMismatch - Expected status {mismatch.expected} but was {mismatch.actual}"
    elif isinstance(mismatch, HeaderMismatch):
        return mismatch.description
    elif isinstance(mismatch, BodyTypeMismatch):
        return f"BodyTypeMismatch - Expected body to have type '{mismatch.expected}' but was '{mismatch.actual}'"
    elif isinstance(mismatch, BodyMismatch):
        return mismatch.description
    else:
        return str(mismatch)


def render_report(mismatches: Iterable[Any]) -> str:
    """Renders mismatches one per line, each line preceded by the platform line separator."""
    return "".join(os.linesep + format_mismatch(m) for m in mismatches)
