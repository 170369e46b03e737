"""Configuration helpers for the core app."""

from core.config.sheets import SheetsConfig, load_sheets_config

__all__ = ["SheetsConfig", "load_sheets_config"]
