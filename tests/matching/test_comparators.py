import pytest
from provider_verifier.matching.comparators import NAME_TO_COMPARATOR, json_type_name


@pytest.mark.parametrize(
    "value, expected",
    [
        (None, "null"),
        (True, "boolean"),
        (3, "number"),
        (2.5, "number"),
        ("x", "string"),
        ([1], "array"),
        ({"a": 1}, "object"),
    ],
)
def test_json_type_name(value, expected):
    assert json_type_name(value) == expected


@pytest.mark.parametrize(
    "name, actual, expected, result",
    [
        ("equality", 1, 1.0, True),
        ("equality", True, 1, False),
        ("equality", "a", "b", False),
        ("type", "Ada", "Grace", True),
        ("type", 42, "42", False),
        ("regex", "2024-01-01", r"\d{4}-\d{2}-\d{2}", True),
        ("regex", "2024-01-01T00:00", r"\d{4}-\d{2}-\d{2}", False),
        ("regex", 42, r"\d+", True),
        ("include", "Hello, Ada", "Ada", True),
        ("include", "Hello", "Ada", False),
    ],
)
def test_comparators_by_rule_name(name, actual, expected, result):
    assert NAME_TO_COMPARATOR[name].evaluate(actual, expected) is result


def test_every_matching_rule_has_a_comparator():
    assert set(NAME_TO_COMPARATOR) == {"equality", "type", "regex", "include"}
