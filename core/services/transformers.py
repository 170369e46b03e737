"""Transformations between spreadsheet rows and domain entities.

A row is a flat list of strings whose positions follow the fixed column
order of its sheet (see ``CAFE_COLUMNS`` and ``RATING_COLUMNS``). Internally
cells are addressed by column name, so positional offsets live in one place.

Structured fields (amenities, operating hours, images, photos) are stored as
compact JSON. Absent optional values are stored as empty cells.
"""

import json
from collections.abc import Callable
from datetime import datetime, timedelta
from typing import Any, TypeVar

import structlog

from core.constants import (
    CAFE_COLUMN_COUNT,
    CAFE_COLUMNS,
    RATING_COLUMN_COUNT,
    RATING_COLUMNS,
)
from core.exceptions import (
    MalformedCellError,
    RowTooShortError,
    RowTransformError,
    SchemaValidationError,
)
from core.schemas import Cafe, CafeRating
from core.services.validation_service import validation_service

logger = structlog.get_logger(__name__)

EntityT = TypeVar("EntityT")


def row_to_cafe(row: list[str]) -> Cafe:
    """Transform a Cafes sheet row into a validated Cafe.

    Args:
        row: Cell values in Cafes column order

    Returns:
        Validated Cafe

    Raises:
        RowTooShortError: If the row has fewer than 18 cells
        MalformedCellError: If a JSON cell cannot be decoded
        SchemaValidationError: If any field violates the schema
    """
    if len(row) < CAFE_COLUMN_COUNT:
        raise RowTooShortError("cafe", CAFE_COLUMN_COUNT, len(row))

    cells = _cells(CAFE_COLUMNS, row)
    data = {
        "id": cells["id"],
        "name": cells["name"],
        "location": {
            "latitude": cells["latitude"],
            "longitude": cells["longitude"],
            "address": cells["address"],
            "city": cells["city"],
            "district": cells["district"] or None,
        },
        "workMetrics": {
            "wifiSpeed": cells["wifiSpeed"],
            "comfortRating": cells["comfortRating"],
            "noiseLevel": cells["noiseLevel"],
            "amenities": _decode_json(cells, "amenities", []),
        },
        "operatingHours": _decode_json(cells, "operatingHours", {}),
        "images": _decode_json(cells, "images", []),
        "community": {
            "loveCount": cells["loveCount"] or 0,
            "lastUpdated": cells["updatedAt"],
            "contributorId": cells["contributorId"],
            "verificationStatus": cells["verificationStatus"],
        },
        "createdAt": cells["createdAt"],
        "updatedAt": cells["updatedAt"],
    }
    return validation_service.validate_cafe(data)


def cafe_to_row(cafe: Cafe) -> list[str]:
    """Transform a Cafe into a Cafes sheet row.

    Args:
        cafe: Cafe to serialize; validated before serialization

    Returns:
        Exactly 18 strings in Cafes column order

    Raises:
        SchemaValidationError: If the cafe violates the schema
    """
    cafe = validation_service.validate_cafe(cafe)
    location = cafe.location
    metrics = cafe.work_metrics
    cells = {
        "id": cafe.id,
        "name": cafe.name,
        "address": location.address,
        "latitude": str(location.latitude),
        "longitude": str(location.longitude),
        "city": location.city,
        "district": location.district or "",
        "wifiSpeed": metrics.wifi_speed,
        "comfortRating": str(metrics.comfort_rating),
        "noiseLevel": metrics.noise_level,
        "amenities": _encode_json(metrics.amenities),
        "operatingHours": _encode_json(
            {
                day: hours.model_dump(by_alias=True, exclude_none=True)
                if hours
                else None
                for day, hours in cafe.operating_hours.items()
            }
        ),
        "images": _encode_json(
            [image.model_dump(mode="json", by_alias=True) for image in cafe.images]
        ),
        "loveCount": str(cafe.community.love_count),
        "contributorId": cafe.community.contributor_id,
        "verificationStatus": cafe.community.verification_status,
        "createdAt": format_timestamp(cafe.created_at),
        "updatedAt": format_timestamp(cafe.updated_at),
    }
    return [cells[column] for column in CAFE_COLUMNS]


def row_to_rating(row: list[str]) -> CafeRating:
    """Transform a Ratings sheet row into a validated CafeRating.

    Empty work metric cells mean the rating does not override that metric;
    when all three are empty the rating carries no work metrics at all.

    Raises:
        RowTooShortError: If the row has fewer than 10 cells
        MalformedCellError: If the photos cell cannot be decoded
        SchemaValidationError: If any field violates the schema
    """
    if len(row) < RATING_COLUMN_COUNT:
        raise RowTooShortError("rating", RATING_COLUMN_COUNT, len(row))

    cells = _cells(RATING_COLUMNS, row)
    metrics = {
        key: cells[key]
        for key in ("wifiSpeed", "comfortRating", "noiseLevel")
        if cells[key]
    }
    data = {
        "ratingId": cells["ratingId"],
        "cafeId": cells["cafeId"],
        "sessionId": cells["sessionId"],
        "workMetrics": metrics or None,
        "comment": cells["comment"] or None,
        "photos": _decode_json(cells, "photos", None),
        "loveGiven": cells["loveGiven"].lower() == "true",
        "ratedAt": cells["ratedAt"],
    }
    return validation_service.validate_cafe_rating(data)


def rating_to_row(rating: CafeRating) -> list[str]:
    """Transform a CafeRating into a Ratings sheet row.

    Raises:
        SchemaValidationError: If the rating violates the schema
    """
    rating = validation_service.validate_cafe_rating(rating)
    metrics = rating.work_metrics
    cells = {
        "ratingId": rating.rating_id,
        "cafeId": rating.cafe_id,
        "sessionId": rating.session_id,
        "wifiSpeed": (metrics.wifi_speed if metrics else None) or "",
        "comfortRating": _optional_str(metrics.comfort_rating if metrics else None),
        "noiseLevel": (metrics.noise_level if metrics else None) or "",
        "comment": rating.comment or "",
        "photos": _encode_json(rating.photos) if rating.photos is not None else "",
        "loveGiven": "true" if rating.love_given else "false",
        "ratedAt": format_timestamp(rating.rated_at),
    }
    return [cells[column] for column in RATING_COLUMNS]


def rows_to_cafes(rows: list[list[str]]) -> list[Cafe]:
    """Transform Cafes sheet rows, dropping rows that fail.

    Blank rows are skipped silently. Failing rows are skipped and reported
    once, as a single warning listing every failure.

    Returns:
        Cafes for every valid row, in sheet order
    """
    return _transform_rows(rows, row_to_cafe, "cafe")


def rows_to_ratings(rows: list[list[str]]) -> list[CafeRating]:
    """Transform Ratings sheet rows, dropping rows that fail.

    Returns:
        Ratings for every valid row, in sheet order
    """
    return _transform_rows(rows, row_to_rating, "rating")


def is_blank_row(row: list[str]) -> bool:
    """Return True for rows with no cells or only empty cells."""
    return not any(str(cell).strip() for cell in row)


def format_timestamp(value: datetime) -> str:
    """Render a timestamp as ISO 8601, using ``Z`` for UTC."""
    text = value.isoformat()
    if value.utcoffset() == timedelta(0):
        text = text.removesuffix("+00:00") + "Z"
    return text


def _transform_rows(
    rows: list[list[str]],
    transform: Callable[[list[str]], EntityT],
    entity: str,
) -> list[EntityT]:
    entities: list[EntityT] = []
    errors: list[dict[str, Any]] = []

    for index, row in enumerate(rows):
        if is_blank_row(row):
            continue
        try:
            entities.append(transform(row))
        except (RowTransformError, SchemaValidationError) as e:
            errors.append({"row": index + 1, "error": str(e)})

    if errors:
        logger.warning(
            "Row transformation errors",
            entity=entity,
            total_rows=len(rows),
            valid_rows=len(entities),
            error_count=len(errors),
            errors=errors,
        )

    return entities


def _cells(columns: tuple[str, ...], row: list[str]) -> dict[str, str]:
    return {column: str(row[position]).strip() for position, column in enumerate(columns)}


def _decode_json(cells: dict[str, str], column: str, default: Any) -> Any:
    raw = cells[column]
    if not raw:
        return default
    try:
        return json.loads(raw)
    except json.JSONDecodeError as e:
        raise MalformedCellError(column, str(e)) from e


def _encode_json(value: Any) -> str:
    return json.dumps(value, separators=(",", ":"), ensure_ascii=False)


def _optional_str(value: Any) -> str:
    return "" if value is None else str(value)
