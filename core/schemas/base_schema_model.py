"""Base pydantic model for centralized configuration of schema definitions."""

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class BaseSchemaModel(BaseModel):
    """Base pydantic model for centralized configuration of schema definitions.

    This base model sets common configurations for all schema models
    in the application, ensuring consistency and reducing redundancy.
    Field names are snake_case in Python and camelCase on the wire, which
    matches both the API payloads and the JSON stored in sheet cells.
    """

    model_config = ConfigDict(
        from_attributes=True,
        alias_generator=to_camel,
        populate_by_name=True,
        use_enum_values=True,
        extra="ignore",
        str_strip_whitespace=True,
    )
