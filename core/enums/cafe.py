"""Cafe-related enumerations.

This module contains the enumerated values accepted for a cafe's work
metrics and community verification level. The values double as the
literal strings stored in the spreadsheet cells.
"""

from enum import Enum


class WifiSpeed(str, Enum):
    """Perceived WiFi speed at a cafe."""

    SLOW = "slow"
    MEDIUM = "medium"
    FAST = "fast"
    FIBER = "fiber"


class NoiseLevel(str, Enum):
    """Ambient noise level at a cafe."""

    QUIET = "quiet"
    MODERATE = "moderate"
    LIVELY = "lively"


class VerificationStatus(str, Enum):
    """Community verification level of a cafe listing.

    New listings start unverified; verified listings were confirmed by
    other contributors and premium listings by the venue itself.
    """

    UNVERIFIED = "unverified"
    VERIFIED = "verified"
    PREMIUM = "premium"
