# fitclub/schemas/_strict_base.py
"""Base DTOs for the scheduling API; unknown fields are a validation error."""

from pydantic import BaseModel, ConfigDict


class StrictModel(BaseModel):
    model_config = ConfigDict(extra="forbid", validate_assignment=True)


class StrictRequestModel(StrictModel):
    """Payload base; a misspelled field fails with 422 instead of being dropped."""
