"""Shared API model pieces."""

from datetime import datetime
from typing import Annotated

from pydantic import BaseModel, Field, PlainSerializer

# Custom datetime serializer for ISO 8601 with Z suffix (Pydantic v2)
DateTimeWithZ = Annotated[
    datetime,
    PlainSerializer(
        lambda v: v.isoformat().replace("+00:00", "Z") if v else None, return_type=str
    ),
]


class ProblemDetailResponse(BaseModel):
    """RFC 7807 problem details, as returned in the "detail" member of errors."""

    type: str = Field(..., description="URN identifying the error kind")
    title: str = Field(..., description="Short summary of the error kind")
    status: int = Field(..., description="HTTP status code")
    detail: str = Field(..., description="Explanation of this occurrence")
    instance: str = Field(..., description="Request URL")
