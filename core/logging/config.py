"""Structlog configuration for dual output: JSON files and colored console."""

import logging
import logging.handlers
import os
from pathlib import Path

import structlog

from core.logging.processors import (
    add_process_info,
    add_request_context,
    add_service_context,
    console_renderer,
)

DEFAULT_LOG_FILE_PATH = "./logs/cafe-discovery.log"

# 50MB per file
MAX_LOG_FILE_BYTES = 50 * 1024 * 1024
LOG_FILE_BACKUP_COUNT = 20


def setup_logging() -> None:
    """Configure structlog with dual output: JSON file logs and colored console logs.

    File Output:
    - JSON formatted with all metadata
    - Rotating file handler
    - Includes: timestamp, level, logger, message, request_id, service_name,
      environment, process/thread info

    Console Output:
    - Format: [LEVEL] timestamp | request_id | logger_name | message key=value...

    Environment Variables:
    - LOG_FILE_PATH: Path to log file (default: ./logs/cafe-discovery.log)
    - LOG_LEVEL: Logging level (default: INFO)
    - SERVICE_NAME: Service name for metadata (default: cafe-discovery)
    - ENVIRONMENT: Deployment environment (default: development)
    """
    log_file_path = os.getenv("LOG_FILE_PATH", DEFAULT_LOG_FILE_PATH)
    log_level = getattr(logging, os.getenv("LOG_LEVEL", "INFO").upper(), logging.INFO)

    Path(log_file_path).parent.mkdir(parents=True, exist_ok=True)

    file_handler = logging.handlers.RotatingFileHandler(
        filename=log_file_path,
        maxBytes=MAX_LOG_FILE_BYTES,
        backupCount=LOG_FILE_BACKUP_COUNT,
        encoding="utf-8",
    )
    file_handler.setLevel(log_level)

    console_handler = logging.StreamHandler()
    console_handler.setLevel(log_level)

    shared_processors = [
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt="iso", utc=True),
        add_request_context,
    ]

    structlog.configure(
        processors=[
            *shared_processors,
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            add_service_context,
            add_process_info,
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    # Records from libraries that log through stdlib go through the pre-chain
    file_handler.setFormatter(
        structlog.stdlib.ProcessorFormatter(
            processor=structlog.processors.JSONRenderer(),
            foreign_pre_chain=[*shared_processors, add_service_context, add_process_info],
        )
    )
    console_handler.setFormatter(
        structlog.stdlib.ProcessorFormatter(
            processor=console_renderer,
            foreign_pre_chain=shared_processors,
        )
    )

    root_logger = logging.getLogger()
    root_logger.handlers.clear()
    root_logger.addHandler(file_handler)
    root_logger.addHandler(console_handler)
    root_logger.setLevel(log_level)

    # Per-request connection chatter from the HTTP client
    logging.getLogger("urllib3").setLevel(max(log_level, logging.WARNING))

    structlog.get_logger(__name__).info(
        "Logging configured",
        log_file=log_file_path,
        log_level=logging.getLevelName(log_level),
    )
