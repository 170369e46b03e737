"""Custom structlog processors for request context and service metadata."""

import os
import threading

from colorama import Fore, Style, just_fix_windows_console
from structlog.typing import EventDict, WrappedLogger

from core.logging.context import get_request_id

just_fix_windows_console()

LEVEL_COLORS = {
    "DEBUG": Fore.CYAN,
    "INFO": Fore.GREEN,
    "WARNING": Fore.YELLOW,
    "ERROR": Fore.RED,
    "CRITICAL": Fore.RED + Style.BRIGHT,
}

# Shown in the line prefix or only useful in the JSON file
CONSOLE_EXCLUDED_FIELDS = frozenset(
    {
        "level",
        "timestamp",
        "request_id",
        "logger",
        "event",
        "process_id",
        "thread_id",
        "service_name",
        "environment",
    }
)


def add_request_context(
    _logger: WrappedLogger, _method_name: str, event_dict: EventDict
) -> EventDict:
    """Add the request ID of the current context to log events.

    Set by RequestIDMiddleware for the duration of each HTTP request.
    """
    request_id = get_request_id()
    if request_id:
        event_dict["request_id"] = request_id
    return event_dict


def add_service_context(
    _logger: WrappedLogger, _method_name: str, event_dict: EventDict
) -> EventDict:
    """Add service name and deployment environment to log events."""
    event_dict["service_name"] = os.getenv("SERVICE_NAME", "cafe-discovery")
    event_dict["environment"] = os.getenv("ENVIRONMENT", "development")
    return event_dict


def add_process_info(
    _logger: WrappedLogger, _method_name: str, event_dict: EventDict
) -> EventDict:
    """Add process and thread ids to log events.

    The thread id tells apart the request thread from the event loop
    thread that runs the sheets calls.
    """
    event_dict["process_id"] = os.getpid()
    event_dict["thread_id"] = threading.get_ident()
    return event_dict


def console_renderer(
    _logger: WrappedLogger, _method_name: str, event_dict: EventDict
) -> str:
    """Render log events as colored single lines for console output.

    Format: [LEVEL] timestamp | request_id | logger_name | message key=value...
    """
    level = event_dict.get("level", "INFO").upper()
    level_color = LEVEL_COLORS.get(level, Fore.WHITE)

    formatted = (
        f"{level_color}[{level:<8}]{Style.RESET_ALL} "
        f"{Fore.WHITE}{event_dict.get('timestamp', '')}{Style.RESET_ALL} | "
        f"{Fore.MAGENTA}{event_dict.get('request_id', '-')}{Style.RESET_ALL} | "
        f"{Fore.BLUE}{event_dict.get('logger', 'root')}{Style.RESET_ALL} | "
        f"{event_dict.get('event', '')}"
    )

    extra_fields = {
        key: value
        for key, value in event_dict.items()
        if key not in CONSOLE_EXCLUDED_FIELDS
    }
    if extra_fields:
        extra_str = " ".join(f"{key}={value}" for key, value in extra_fields.items())
        formatted += f" {Fore.YELLOW}{extra_str}{Style.RESET_ALL}"

    return formatted
