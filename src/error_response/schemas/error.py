"""Error response body.

Every derived error response carries the same body: {"code": 422, "error": "..."}.
For 5xx statuses "error" is always the generic placeholder, never the real message.
"""

from pydantic import BaseModel, Field


class ErrorBody(BaseModel):
    """Numeric HTTP status plus the client-facing message."""

    code: int = Field(ge=100, le=599)
    error: str
