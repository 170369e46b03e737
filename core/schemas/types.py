"""Reusable constrained string types for cafe schemas."""

import re
from typing import Annotated
from uuid import UUID

from pydantic import AfterValidator, HttpUrl, TypeAdapter, ValidationError

TIME_OF_DAY_PATTERN = re.compile(r"^([01]?[0-9]|2[0-3]):[0-5][0-9]$")

_http_url_adapter = TypeAdapter(HttpUrl)


def _check_uuid(value: str) -> str:
    try:
        UUID(value)
    except ValueError as e:
        raise ValueError("must be a valid UUID") from e
    return value


def _check_url(value: str) -> str:
    # Validate only; the original string is kept so rows round-trip unchanged
    try:
        _http_url_adapter.validate_python(value)
    except ValidationError as e:
        raise ValueError("must be a valid URL") from e
    return value


def _check_time_of_day(value: str) -> str:
    if not TIME_OF_DAY_PATTERN.match(value):
        raise ValueError("must be in HH:MM format")
    return value


UuidStr = Annotated[str, AfterValidator(_check_uuid)]
UrlStr = Annotated[str, AfterValidator(_check_url)]
TimeOfDay = Annotated[str, AfterValidator(_check_time_of_day)]
