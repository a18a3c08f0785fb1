# shopfront/schemas/base.py
from pydantic import ConfigDict
from pydantic.alias_generators import to_camel
from sqlmodel import SQLModel


class ApiModel(SQLModel):
    """
    Base for every request/response schema.

    JSON on the wire is camelCase (`productId`, `totalAmount`); snake_case
    field names are still accepted on input.
    """

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


class MessageRead(ApiModel):
    """Plain acknowledgement body."""

    message: str
