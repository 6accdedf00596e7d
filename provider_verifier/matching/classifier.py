# Classifies the differences between an expected and an actual response.

import json
import logging
from typing import Any, List, Optional

from provider_verifier.matching import content_type
from provider_verifier.matching.body import ROOT, BodyComparison
from provider_verifier.matching.headers import compare_headers
from provider_verifier.matching.mismatch import BodyMismatch, BodyTypeMismatch, Mismatch, StatusMismatch
from provider_verifier.model.http import ActualResponse, ExpectedResponse

logger = logging.getLogger(__name__)


def _decode_expected(body: Any) -> Any:
    if isinstance(body, (bytes, bytearray)):
        body = body.decode("utf-8")
    if isinstance(body, str):
        try:
            return json.loads(body)
        except ValueError:
            # A JSON string scalar recorded without quotes
            return body
    return body


class MismatchClassifier:
    """Compares an expected response against an actual response.

    The comparison is pure: neither response is modified and the same inputs always
    produce the same mismatch list. Every divergence is reported, in the order
    status, headers, body.
    """

    def compare(self, expected: ExpectedResponse, actual: ActualResponse) -> List[Mismatch]:
        mismatches: List[Mismatch] = []
        mismatches.extend(self.status_mismatches(expected, actual))
        mismatches.extend(compare_headers(expected.headers, actual.headers, expected.header_rules))
        mismatches.extend(self.body_mismatches(expected, actual.body, actual.headers))
        logger.debug(
            f"Classified {len(mismatches)} mismatches (expected status {expected.status}, actual {actual.status})"
        )
        return mismatches

    def status_mismatches(self, expected: ExpectedResponse, actual: ActualResponse) -> List[Mismatch]:
        if actual.status != expected.status:
            return [StatusMismatch(expected=expected.status, actual=actual.status)]
        return []

    def body_mismatches(
        self, expected: ExpectedResponse, actual_body: Optional[str], actual_headers: Optional[dict] = None
    ) -> List[Mismatch]:
        """Compares bodies. Also used on its own by targets that only verify message contents."""
        if not expected.has_body:
            return []
        comparison = BodyComparison(expected.body_rules, strict=expected.strict)
        if expected.body == "":
            # An empty expected body only matches an empty or absent actual body
            return list(comparison.compare_text("", actual_body))
        if not actual_body:
            return [
                BodyMismatch(
                    path=ROOT,
                    expected=expected.body,
                    actual=None,
                    description=f"BodyMismatch at '{ROOT}' - Expected a response body but was missing",
                )
            ]

        expected_type = content_type.resolve(expected.content_type, expected.headers, expected.body)
        actual_type = content_type.resolve(None, actual_headers or {}, actual_body)
        if expected_type != actual_type:
            return [BodyTypeMismatch(expected=expected_type or "", actual=actual_type)]

        if not content_type.is_structured(expected_type):
            return list(comparison.compare_text(expected.body, actual_body))

        try:
            actual_value = json.loads(actual_body)
        except ValueError as e:
            return [
                BodyMismatch(
                    path=ROOT,
                    expected=expected.body,
                    actual=actual_body,
                    description=f"BodyMismatch at '{ROOT}' - Failed to parse the actual body as JSON: {e}",
                )
            ]
        return list(comparison.compare_structured(_decode_expected(expected.body), actual_value))


def classify(expected: ExpectedResponse, actual: ActualResponse) -> List[Mismatch]:
    """Convenience wrapper around `MismatchClassifier().compare`."""
    return MismatchClassifier().compare(expected, actual)
