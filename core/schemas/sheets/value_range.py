"""Schema for the Sheets ``values`` resource."""

from typing import Any, Literal

from pydantic import Field

from core.schemas.base_schema_model import BaseSchemaModel


class ValueRange(BaseSchemaModel):
    """Response body of a ``values.get`` call.

    The API omits ``values`` entirely when the range is empty.
    """

    range: str = Field("", description="A1 range the values cover")
    major_dimension: Literal["ROWS", "COLUMNS"] = Field(
        "ROWS", description="Orientation of the values array"
    )
    values: list[list[Any]] = Field(
        default_factory=list, description="Cell values, header row excluded"
    )
