"""Base model configuration for validated value objects."""

from pydantic import BaseModel, ConfigDict


class Model(BaseModel):
    """Immutable model rejecting unknown fields."""

    model_config = ConfigDict(frozen=True, extra="forbid")
