# app/schemas/common.py - Shared schema base: snake_case in Python, camelCase on the wire
from typing import Literal
from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

RecordStatus = Literal["Active", "Inactive"]


class CamelModel(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


class MessageOut(BaseModel):
    message: str
