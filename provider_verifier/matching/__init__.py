"""Response matching: classifies the differences between expected and actual responses."""

from .classifier import MismatchClassifier, classify
from .mismatch import BodyMismatch, BodyTypeMismatch, HeaderMismatch, Mismatch, StatusMismatch
from .report import format_mismatch, render_report

__all__ = [
    "BodyMismatch",
    "BodyTypeMismatch",
    "HeaderMismatch",
    "Mismatch",
    "MismatchClassifier",
    "StatusMismatch",
    "classify",
    "format_mismatch",
    "render_report",
]
