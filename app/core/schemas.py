"""Shared pydantic base for the JSON wire format."""

import uuid

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """Serializes as camelCase; accepts camelCase or snake_case on input."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


class UserSummary(CamelModel):
    """Author reference embedded in prompts and comments."""
    id: uuid.UUID = Field(serialization_alias="_id")
    username: str
    avatar: str = ""
