"""
Base models with common fields and utilities.
"""

import uuid

from pydantic import BaseModel as PydanticBaseModel, ConfigDict, Field


def new_id() -> str:
    """Generate a short opaque record identifier."""
    return uuid.uuid4().hex[:9]


class ValueObject(PydanticBaseModel):
    """
    Immutable value without identity.
    Edits go through ``model_copy(update=...)``.
    """

    model_config = ConfigDict(frozen=True)


class BaseModel(ValueObject):
    """
    Abstract base record with an opaque ID.
    All records should inherit from this.
    """

    id: str = Field(default_factory=new_id)
