"""Django application configuration for core."""

import structlog
from django.apps import AppConfig

logger = structlog.get_logger(__name__)


class CoreConfig(AppConfig):
    """Configuration class for the core application."""

    name = "core"
    verbose_name = "Cafe discovery core"

    def ready(self) -> None:
        """Log the data store configuration once Django is ready.

        The application context itself is built lazily on first use so
        that management commands run without sheets credentials.
        """
        from core.config import load_sheets_config  # noqa: PLC0415

        config = load_sheets_config()
        logger.info(
            "Core app ready",
            spreadsheet_configured=bool(config.spreadsheet_id),
            rate_limit_requests=config.rate_limit_requests,
            rate_limit_window=config.rate_limit_window,
        )
