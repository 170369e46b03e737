"""Google Sheets API payload schemas."""

from core.schemas.sheets.value_range import ValueRange

__all__ = ["ValueRange"]
