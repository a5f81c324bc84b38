"""
Base schemas for all models.
"""

from pydantic import BaseModel, ConfigDict


class BaseSchema(BaseModel):
    """
    Base for API and row schemas.

    Strings are trimmed, assignments re-validated, and models can be
    built from attribute objects as well as dicts.
    """
    model_config = ConfigDict(
        from_attributes=True,
        str_strip_whitespace=True,
        validate_assignment=True
    )


class FrozenSchema(BaseSchema):
    """Immutable schema: order lines, demand and report values."""
    model_config = ConfigDict(frozen=True)
