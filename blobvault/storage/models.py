from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field


class BlobMetadata(BaseModel):
    """Read-only snapshot of a stored blob, built fresh on every query."""

    model_config = ConfigDict(frozen=True)

    name: str
    container: str
    length: int = Field(ge=0)
    content_type: str
    last_modified: datetime
    url: str | None = None
