"""Failure classification used by the retry policy."""

from enum import Enum


class ErrorKind(str, Enum):
    """Kinds of failure a remote store call can end in.

    The retry policy decides on the kind alone, never on the exception
    instance, so the decision stays a pure function.
    """

    RATE_LIMITED = "rate_limited"
    NETWORK = "network"
    CLIENT = "client"
    SERVER = "server"
    NOT_FOUND = "not_found"
    VALIDATION = "validation"
    UNKNOWN = "unknown"
