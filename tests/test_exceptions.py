import os

import pytest
from provider_verifier.exceptions import (
    MultipleFailuresError,
    ProviderVerificationError,
    StateSetupError,
    TransportError,
    UnexpectedFault,
    ValidationError,
    VerificationFailure,
)
from provider_verifier.matching import StatusMismatch


def test_provider_verification_error_detail_fallback():
    """Test that detail falls back to the first arg if not provided."""
    with pytest.raises(ProviderVerificationError) as exc_info:
        raise ProviderVerificationError("Detail fallback test")
    assert exc_info.value.detail == "Detail fallback test"
    assert exc_info.value.interaction is None


def test_provider_verification_error_no_detail():
    """Test that detail is None if no args and no detail kwarg."""
    assert ProviderVerificationError().detail is None


def test_validation_error_lists_every_problem():
    error = ValidationError(["first problem", "second problem"])

    assert error.errors == ["first problem", "second problem"]
    assert "first problem" in str(error)
    assert "second problem" in str(error)


def test_transport_error_is_a_verification_error():
    assert issubclass(TransportError, ProviderVerificationError)


def test_verification_failure_renders_report():
    failure = VerificationFailure([StatusMismatch(expected=200, actual=404)])

    assert isinstance(failure, AssertionError)
    assert isinstance(failure, ProviderVerificationError)
    assert failure.mismatches == [StatusMismatch(expected=200, actual=404)]
    assert str(failure) == os.linesep + "StatusMismatch - Expected status 200 but was 404"
    assert failure.report == str(failure)


def test_state_setup_error_wraps_cause():
    cause = RuntimeError("database down")
    error = StateSetupError("user exists", cause)

    assert error.state == "user exists"
    assert error.cause is cause
    assert error.__cause__ is cause
    assert "user exists" in str(error)
    assert "database down" in str(error)


def test_unexpected_fault_wraps_cause():
    cause = KeyError("missing")
    fault = UnexpectedFault(cause, "before hook setup")

    assert fault.cause is cause
    assert fault.__cause__ is cause
    assert fault.stage == "before hook setup"
    assert str(fault).startswith("Unexpected error during before hook setup: KeyError")


def test_multiple_failures_error_keeps_order():
    errors = [TransportError("refused"), UnexpectedFault(ValueError("boom"), "after hook cleanup")]

    error = MultipleFailuresError(errors)

    assert error.errors == errors
    assert str(error).startswith("There were 2 errors:")
