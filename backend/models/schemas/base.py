"""Shared base model: snake_case in Python, camelCase on the wire."""

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """Serializes with camelCase aliases and accepts either spelling on input."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)
