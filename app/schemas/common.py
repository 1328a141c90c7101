from typing import Any, Optional

from pydantic import BaseModel
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """Base schema exposing snake_case attributes as camelCase JSON keys."""

    class Config:
        alias_generator = to_camel
        populate_by_name = True
        from_attributes = True


def envelope(data: Any = None, message: Optional[str] = None) -> dict:
    body = {"ok": True}
    if data is not None:
        body["data"] = data
    if message is not None:
        body["message"] = message
    return body
