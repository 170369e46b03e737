"""Request context for log correlation.

The request ID lives in a context variable rather than thread-local storage:
views hand work to an event loop running in another thread, and context
variables follow that hand-off while thread-locals do not.
"""

from contextvars import ContextVar

_request_id: ContextVar[str | None] = ContextVar("request_id", default=None)


def set_request_id(request_id: str) -> None:
    """Store the request ID for the current context.

    Args:
        request_id: The unique request identifier to store.
    """
    _request_id.set(request_id)


def get_request_id() -> str | None:
    """Retrieve the request ID of the current context.

    Returns:
        The current request ID, or None if not set.
    """
    return _request_id.get()


def clear_request_id() -> None:
    """Forget the request ID once the request is complete."""
    _request_id.set(None)
