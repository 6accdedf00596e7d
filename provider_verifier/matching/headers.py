from typing import List, Mapping, Optional

from provider_verifier.matching.comparators import regex_match
from provider_verifier.matching.mismatch import HeaderMismatch
from provider_verifier.model.http import get_header


def _normalize(value: str) -> List[str]:
    # Whitespace around the items of a comma separated header value is not significant
    return [item.strip() for item in value.split(",")]


def compare_header(
    name: str, expected: str, actual: Optional[str], regex: Optional[str] = None
) -> Optional[HeaderMismatch]:
    """Compares one expected header against the actual value, if any.

    Returns a HeaderMismatch describing the divergence, or None if the header matches.
    """
    if actual is None:
        return HeaderMismatch(
            name=name,
            expected=expected,
            actual=None,
            description=f"HeaderMismatch - Expected a header '{name}' but was missing",
        )
    if regex is not None:
        if regex_match.evaluate(actual.strip(), regex):
            return None
        return HeaderMismatch(
            name=name,
            expected=expected,
            actual=actual,
            description=f"HeaderMismatch - Expected header '{name}' with value '{actual}' to match '{regex}'",
        )
    if _normalize(expected) == _normalize(actual):
        return None
    return HeaderMismatch(
        name=name,
        expected=expected,
        actual=actual,
        description=f"HeaderMismatch - Expected header '{name}' to have value '{expected}' but was '{actual}'",
    )


def compare_headers(
    expected: Mapping[str, str], actual: Mapping[str, str], rules: Optional[Mapping[str, str]] = None
) -> List[HeaderMismatch]:
    """Checks every expected header against the actual headers. Extra actual headers are ignored."""
    rules = rules or {}
    mismatches: List[HeaderMismatch] = []
    for name, expected_value in expected.items():
        mismatch = compare_header(name, expected_value, get_header(actual, name), get_header(rules, name))
        if mismatch is not None:
            mismatches.append(mismatch)
    return mismatches
