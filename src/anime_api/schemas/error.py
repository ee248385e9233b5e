"""Error response schema.

Every non-2xx response carries this body, built only by error_handlers.py.
The stackTrace key is present only when the request asked for ?trace=true.
"""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field


class ErrorBody(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    timestamp: datetime
    path: str
    status: int
    error: str
    message: str
    developer_message: str = Field(alias="developerMessage")
    request_id: str | None = Field(default=None, alias="requestId")
    stack_trace: list[str] | None = Field(default=None, alias="stackTrace")

    def to_content(self) -> dict[str, object]:
        """JSON-ready dict with camelCase keys; unset optional keys are left out."""
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)
