"""Rejection code constants for fail-closed document checks.

These constants prevent stringly-typed rejection reasons in log lines
and let callers tell which shape rule a registry page broke.
"""

from enum import Enum


class RejectionCode(str, Enum):
    """Reasons a packages document fails the strict shape check."""

    NOT_AN_OBJECT = "NOT_AN_OBJECT"
    PACKAGES_NOT_AN_OBJECT = "PACKAGES_NOT_AN_OBJECT"
    RELEASES_NOT_AN_ARRAY = "RELEASES_NOT_AN_ARRAY"
