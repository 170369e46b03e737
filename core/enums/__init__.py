"""Enumerations for the core app."""

from core.enums.cafe import NoiseLevel, VerificationStatus, WifiSpeed
from core.enums.error_kind import ErrorKind

__all__ = ["ErrorKind", "NoiseLevel", "VerificationStatus", "WifiSpeed"]
