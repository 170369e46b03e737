"""Connectivity probe result."""

from pydantic import Field

from core.schemas.base_schema_model import BaseSchemaModel


class NetworkStatus(BaseSchemaModel):
    """Whether the remote store is currently reachable."""

    online: bool = Field(..., description="True when the network is available")
