"""
Base schema configuration shared by request and response models.
"""
from typing import Optional
from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """
    JSON fields are camelCase on the wire (requestId, aiLogId, ...) while Python
    code uses snake_case. Both spellings are accepted on input.
    """

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


class OkResponse(CamelModel):
    """Acknowledgement for mutations that return no resource."""

    request_id: str = Field(..., description="Request ID for tracing")
    ok: bool = Field(True, description="Whether the operation succeeded")
    message: Optional[str] = Field(None, description="Human-readable outcome")
