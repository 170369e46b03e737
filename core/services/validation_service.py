"""Schema validation for cafe and rating data.

Every entity leaving the data access layer passes through here, both when
it is read back from a sheet row and before it is written to one. Pydantic
errors are converted into :class:`SchemaValidationError` so callers only
deal with the service's own exception types.
"""

from typing import Any, TypeVar

import structlog
from pydantic import BaseModel, TypeAdapter, ValidationError

from core.enums import NoiseLevel, VerificationStatus, WifiSpeed
from core.exceptions import SchemaValidationError
from core.schemas import (
    Cafe,
    CafeImage,
    CafeRating,
    Community,
    FilterOptions,
    Location,
    OperatingHours,
    WorkMetrics,
)

logger = structlog.get_logger(__name__)

ModelT = TypeVar("ModelT", bound=BaseModel)

_operating_hours_adapter = TypeAdapter(OperatingHours)

_ENUM_VALUES = {
    "workMetrics.wifiSpeed": [member.value for member in WifiSpeed],
    "workMetrics.noiseLevel": [member.value for member in NoiseLevel],
    "community.verificationStatus": [member.value for member in VerificationStatus],
}


class ValidationService:
    """Validates raw data or model instances against the cafe schemas."""

    def validate_cafe(self, data: Any) -> Cafe:
        """Validate cafe data.

        Args:
            data: Mapping (camelCase or snake_case keys) or Cafe instance

        Returns:
            Validated Cafe

        Raises:
            SchemaValidationError: If any constraint is violated
        """
        return self._validate(Cafe, data, "cafe")

    def validate_cafe_rating(self, data: Any) -> CafeRating:
        """Validate cafe rating data.

        Raises:
            SchemaValidationError: If any constraint is violated
        """
        return self._validate(CafeRating, data, "cafeRating")

    def validate_location(self, data: Any) -> Location:
        """Validate location data."""
        return self._validate(Location, data, "location")

    def validate_work_metrics(self, data: Any) -> WorkMetrics:
        """Validate work metrics data."""
        return self._validate(WorkMetrics, data, "workMetrics")

    def validate_cafe_image(self, data: Any) -> CafeImage:
        """Validate cafe image data."""
        return self._validate(CafeImage, data, "cafeImage")

    def validate_community(self, data: Any) -> Community:
        """Validate community data."""
        return self._validate(Community, data, "community")

    def validate_filter_options(self, data: Any) -> FilterOptions:
        """Validate filter options."""
        return self._validate(FilterOptions, data, "filterOptions")

    def validate_operating_hours(self, data: Any) -> OperatingHours:
        """Validate an operating hours mapping.

        Raises:
            SchemaValidationError: If a day has a malformed opening window
        """
        try:
            return _operating_hours_adapter.validate_python(data)
        except ValidationError as e:
            raise SchemaValidationError.from_pydantic("operatingHours", e) from e

    def safe_validate_cafe(
        self, data: Any
    ) -> tuple[Cafe | None, SchemaValidationError | None]:
        """Validate cafe data without raising.

        Returns:
            Tuple of (cafe, None) on success or (None, error) on failure
        """
        try:
            return self.validate_cafe(data), None
        except SchemaValidationError as e:
            return None, e

    def is_valid_cafe(self, data: Any) -> bool:
        """Check if data is a valid cafe without raising."""
        cafe, _ = self.safe_validate_cafe(data)
        return cafe is not None

    def get_enum_values(self, field_path: str) -> list[str] | None:
        """Get the allowed values of an enumerated field.

        Args:
            field_path: Dotted camelCase path, e.g. ``workMetrics.wifiSpeed``

        Returns:
            Allowed values, or None if the field is not enumerated
        """
        return _ENUM_VALUES.get(field_path)

    def _validate(self, model: type[ModelT], data: Any, field: str) -> ModelT:
        # Instances are re-validated from their dump; they may have been
        # built with model_construct() or mutated after construction
        if isinstance(data, BaseModel):
            data = data.model_dump()
        try:
            return model.model_validate(data)
        except ValidationError as e:
            logger.debug(
                "Schema validation failed",
                entity=field,
                error_count=e.error_count(),
            )
            raise SchemaValidationError.from_pydantic(field, e) from e


# Global service instance
validation_service = ValidationService()
