"""Base Pydantic model configuration.

Payload contracts (data coming from callers) and response contracts (plain
data handed back to callers) both build on ``InfrastructureModel`` so that
validation and serialization behave the same everywhere.
"""

from pydantic import BaseModel, ConfigDict


class InfrastructureModel(BaseModel):
    """Base model for payload and response contracts.

    Provides standard Pydantic configuration for:
    - Whitespace stripping on every string (including list items)
    - Ignoring unknown keys so callers can send richer maps
    - Building responses straight from ORM objects
    """

    model_config = ConfigDict(
        populate_by_name=True,  # Accept both field name and alias
        from_attributes=True,  # Build from ORM entities
        str_strip_whitespace=True,
        extra="ignore",
    )
