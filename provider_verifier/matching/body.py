# Structural and textual comparison of response bodies.

import json
import re
from typing import Any, Dict, List, Mapping, Optional

from provider_verifier.matching.comparators import NAME_TO_COMPARATOR, json_type_name
from provider_verifier.matching.mismatch import BodyMismatch
from provider_verifier.model.http import MatchingRule

ROOT = "$"

_INDEX_PATTERN = re.compile(r"\[\d+\]")


def child_path(parent: str, key: str) -> str:
    return key if parent == ROOT else f"{parent}.{key}"


def index_path(parent: str, index: int) -> str:
    return f"{parent}[{index}]"


def format_value(value: Any) -> str:
    try:
        return json.dumps(value, default=str)
    except (TypeError, ValueError):
        return repr(value)


def _mismatch(path: str, expected: Any, actual: Any, message: str) -> BodyMismatch:
    return BodyMismatch(
        path=path,
        expected=expected,
        actual=actual,
        description=f"BodyMismatch at '{path}' - {message}",
    )


class BodyComparison:
    """Compares one expected body against one actual body, collecting every divergent path.

    Attributes:
        rules: Matching rules keyed by path. Array indices in a rule's path may be
            written as `[*]` to apply to every element.
        strict: Whether keys present only in the actual objects are mismatches.
    """

    def __init__(self, rules: Optional[Mapping[str, MatchingRule]] = None, strict: bool = False):
        self.rules: Dict[str, MatchingRule] = dict(rules or {})
        self.strict = strict

    def rule_for(self, path: str) -> Optional[MatchingRule]:
        if path in self.rules:
            return self.rules[path]
        return self.rules.get(_INDEX_PATTERN.sub("[*]", path))

    def compare_structured(
        self, expected: Any, actual: Any, path: str = ROOT, by_type: bool = False
    ) -> List[BodyMismatch]:
        rule = self.rule_for(path)
        if rule is not None:
            if rule.match == "type":
                by_type = True
            elif rule.match == "equality":
                by_type = False
            else:
                return self._apply_rule(rule, expected, actual, path)

        if isinstance(expected, dict):
            if not isinstance(actual, dict):
                return [self._type_mismatch(expected, actual, path)]
            return self._compare_objects(expected, actual, path, by_type)
        if isinstance(expected, list):
            if not isinstance(actual, list):
                return [self._type_mismatch(expected, actual, path)]
            return self._compare_lists(expected, actual, path, by_type)

        if json_type_name(expected) != json_type_name(actual):
            return [self._type_mismatch(expected, actual, path)]
        if NAME_TO_COMPARATOR["type" if by_type else "equality"].evaluate(actual, expected):
            return []
        return [
            _mismatch(path, expected, actual, f"Expected {format_value(expected)} but received {format_value(actual)}")
        ]

    def compare_text(self, expected: Any, actual: Optional[str]) -> List[BodyMismatch]:
        expected_text = expected if isinstance(expected, str) else format_value(expected)
        actual_text = actual or ""
        rule = self.rule_for(ROOT)
        if rule is not None and rule.match in ("regex", "include"):
            return self._apply_rule(rule, expected_text, actual_text, ROOT)
        if expected_text == actual_text:
            return []
        return [
            _mismatch(ROOT, expected_text, actual_text, f"Expected body '{expected_text}' but received '{actual_text}'")
        ]

    def _compare_objects(self, expected: dict, actual: dict, path: str, by_type: bool) -> List[BodyMismatch]:
        mismatches: List[BodyMismatch] = []
        for key, expected_value in expected.items():
            key_path = child_path(path, key)
            if key not in actual:
                message = f"Expected {key}={format_value(expected_value)} but was missing"
                mismatches.append(_mismatch(key_path, expected_value, None, message))
                continue
            mismatches.extend(self.compare_structured(expected_value, actual[key], key_path, by_type))
        if self.strict:
            for key, actual_value in actual.items():
                if key not in expected:
                    mismatches.append(
                        _mismatch(
                            child_path(path, key),
                            None,
                            actual_value,
                            f"Unexpected key {key}={format_value(actual_value)}",
                        )
                    )
        return mismatches

    def _compare_lists(self, expected: list, actual: list, path: str, by_type: bool) -> List[BodyMismatch]:
        mismatches: List[BodyMismatch] = []
        if by_type:
            # Every actual element is checked against the first expected element
            if not expected:
                return mismatches
            for index, actual_item in enumerate(actual):
                mismatches.extend(self.compare_structured(expected[0], actual_item, index_path(path, index), by_type))
            return mismatches

        if len(expected) != len(actual):
            mismatches.append(
                _mismatch(
                    path,
                    expected,
                    actual,
                    f"Expected a List with {len(expected)} elements but received {len(actual)} elements",
                )
            )
        for index, (expected_item, actual_item) in enumerate(zip(expected, actual)):
            mismatches.extend(self.compare_structured(expected_item, actual_item, index_path(path, index), by_type))
        return mismatches

    def _apply_rule(self, rule: MatchingRule, expected: Any, actual: Any, path: str) -> List[BodyMismatch]:
        if rule.match == "regex":
            pattern = rule.regex if rule.regex is not None else str(expected)
            if actual is not None and NAME_TO_COMPARATOR[rule.match].evaluate(actual, pattern):
                return []
            return [_mismatch(path, expected, actual, f"Expected {format_value(actual)} to match '{pattern}'")]
        needle = rule.value if rule.value is not None else str(expected)
        if actual is not None and NAME_TO_COMPARATOR[rule.match].evaluate(actual, needle):
            return []
        return [_mismatch(path, expected, actual, f"Expected {format_value(actual)} to include '{needle}'")]

    @staticmethod
    def _type_mismatch(expected: Any, actual: Any, path: str) -> BodyMismatch:
        return _mismatch(
            path,
            expected,
            actual,
            f"Type mismatch: Expected {json_type_name(expected)} {format_value(expected)} "
            f"but received {json_type_name(actual)} {format_value(actual)}",
        )
